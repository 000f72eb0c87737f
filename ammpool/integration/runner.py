"""
Run a parsed validation request and render its verdict.
"""

from __future__ import annotations

from typing import Any, Dict

from ..config import DEFAULT_CONFIG, ProtocolConfig
from ..core.issuance import validate_issuance
from ..core.spend import validate_spend
from ..core.types import Verdict
from ..state.canonical import canonical_json_bytes
from .tx_json import IssuanceRequest, SpendRequest, ValidationRequest


def run_request(request: ValidationRequest, *, config: ProtocolConfig = DEFAULT_CONFIG) -> Verdict:
    if isinstance(request, SpendRequest):
        return validate_spend(
            request.prior_record,
            request.redeemer,
            request.own_ref,
            request.tx,
            config=config,
        )
    if isinstance(request, IssuanceRequest):
        return validate_issuance(request.redeemer, request.pool_identity, request.tx, config=config)
    raise TypeError(f"unsupported request: {type(request).__name__}")


def verdict_to_dict(verdict: Verdict) -> Dict[str, Any]:
    return {
        "accepted": verdict.accepted,
        "violations": [{"name": v.name, "kind": v.kind.value} for v in verdict.violations],
    }


def verdict_to_json(verdict: Verdict) -> str:
    return canonical_json_bytes(verdict_to_dict(verdict)).decode("utf-8")
