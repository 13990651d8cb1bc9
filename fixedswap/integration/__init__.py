"""
Deployment integration (network profiles).
"""
