#!/usr/bin/env python3

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fixedswap import FixedRatePool, OwnerAuthorizer, TokenLedger
from fixedswap.integration.config import load_network
from fixedswap.state.snapshot import compute_pool_state_root


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Offline fixed-peg pool demo: deposit, swap, withdraw.")
    ap.add_argument("--network", default="mainnet", help="network profile name from networks.yaml")
    ap.add_argument("--networks-file", type=Path, default=None, help="alternate networks YAML file")
    ap.add_argument("--liquidity", type=int, default=1_000_000, help="whole tokens deposited per side")
    ap.add_argument("--swap", type=int, default=1_000, help="whole tokens swapped 0 -> 1")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    profile = load_network(args.network, args.networks_file)
    config = profile.pool_config()
    unit = 10**profile.decimals
    owner, trader = "owner", "trader"

    token0 = TokenLedger(profile.asset0.symbol, profile.decimals)
    token1 = TokenLedger(profile.asset1.symbol, profile.decimals)
    pool = FixedRatePool(config, token0, token1, OwnerAuthorizer(owner))

    for ledger in (token0, token1):
        ledger.mint(owner, args.liquidity * unit)
        ledger.approve(owner, pool.address, args.liquidity * unit)
    token0.mint(trader, args.swap * unit)
    token0.approve(trader, pool.address, args.swap * unit)

    shares = pool.deposit(owner, args.liquidity * unit, args.liquidity * unit)
    print(f"[pool-demo] pool_id={config.pool_id} curve={config.curve_tag} shares={shares}")

    out = pool.swap0_to_1(trader, args.swap * unit)
    print(f"[pool-demo] swap {args.swap * unit} {profile.asset0.symbol} -> {out} {profile.asset1.symbol}")
    print(f"[pool-demo] reserves=({pool.state.reserve0}, {pool.state.reserve1})")

    amount0, amount1 = pool.withdraw(owner, shares)
    print(f"[pool-demo] withdraw all -> ({amount0}, {amount1})")
    print(f"[pool-demo] state_root={compute_pool_state_root(config, pool.state, pool.share_ledger)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
