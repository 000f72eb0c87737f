"""
JSON boundary between tooling and the validators.
"""

from .runner import run_request, verdict_to_dict, verdict_to_json
from .tx_json import IssuanceRequest, SpendRequest, parse_request, parse_transaction, transaction_to_json

__all__ = [
    "run_request",
    "verdict_to_dict",
    "verdict_to_json",
    "IssuanceRequest",
    "SpendRequest",
    "parse_request",
    "parse_transaction",
    "transaction_to_json",
]
