"""
Validators for two-asset constant-product liquidity pools.
"""

__version__ = "0.1.0"
