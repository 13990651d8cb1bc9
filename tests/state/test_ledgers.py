# [TESTER] v1

from __future__ import annotations

import pytest

from fixedswap.state.balances import TokenLedger
from fixedswap.state.lp import ShareLedger


def test_token_ledger_transfer_and_sparse_storage() -> None:
    ledger = TokenLedger("usdc", 6)
    ledger.mint("a", 100)
    ledger.transfer("a", "b", 100)
    assert ledger.balance_of("a") == 0
    assert ledger.get_all_balances() == {"b": 100}
    assert ledger.total_supply() == 100


def test_token_ledger_rejects_overdraft() -> None:
    ledger = TokenLedger("usdc", 6)
    ledger.mint("a", 5)
    with pytest.raises(ValueError):
        ledger.transfer("a", "b", 6)
    assert ledger.balance_of("a") == 5


def test_transfer_from_consumes_allowance() -> None:
    ledger = TokenLedger("usdc", 6)
    ledger.mint("owner", 10)
    ledger.approve("owner", "spender", 7)
    ledger.transfer_from("spender", "owner", "pool", 4)
    assert ledger.allowance("owner", "spender") == 3
    assert ledger.balance_of("pool") == 4
    with pytest.raises(ValueError):
        ledger.transfer_from("spender", "owner", "pool", 4)


def test_token_ledger_rollback_restores_balances_and_allowances() -> None:
    ledger = TokenLedger("usdc", 6)
    ledger.mint("a", 10)
    ledger.approve("a", "b", 10)
    cp = ledger.checkpoint()
    ledger.transfer_from("b", "a", "c", 10)
    ledger.rollback(cp)
    assert ledger.balance_of("a") == 10
    assert ledger.balance_of("c") == 0
    assert ledger.allowance("a", "b") == 10


def test_token_ledger_rejects_bool_amounts() -> None:
    ledger = TokenLedger("usdc", 6)
    with pytest.raises(TypeError):
        ledger.mint("a", True)


def test_share_ledger_mint_burn_supply() -> None:
    shares = ShareLedger()
    shares.mint("a", 3)
    shares.mint("b", 4)
    assert shares.total_supply() == 7
    shares.burn("a", 3)
    assert shares.get_all_balances() == {"b": 4}
    with pytest.raises(ValueError):
        shares.burn("b", 5)


def test_share_ledger_rollback() -> None:
    shares = ShareLedger()
    shares.mint("a", 3)
    cp = shares.checkpoint()
    shares.mint("a", 3)
    shares.rollback(cp)
    assert shares.balance_of("a") == 3
    assert shares.total_supply() == 3
