"""
JSON boundary for transaction views.

Parses the JSON documents used by tooling and test harnesses into the typed
ledger view the validators consume. Byte strings are hex (optionally
0x-prefixed); quantities are JSON integers. Any structural problem raises
ValueError with the path of the offending field.

Document shape:

    {
      "inputs":  [{"out_ref": {"tx_id": hex, "index": int}, "output": <output>}, ...],
      "outputs": [<output>, ...],
      "mint":    [[policy_hex, name_hex, int], ...]
    }

    <output> = {
      "address": {"payment": hex, "stake": hex | null},
      "value":   [[policy_hex, name_hex, int], ...],
      "datum":   null | {"inline": hex} | {"hash": hex}
    }
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from ..state.assets import AssetBundle
from ..state.canonical import hex_to_bytes
from ..state.ledger import (
    TX_ID_BYTES,
    Address,
    Datum,
    DatumHash,
    InlineDatum,
    NoDatum,
    TransactionInfo,
    TxInInfo,
    TxOut,
    TxOutRef,
)

MAX_LIST_ITEMS = 4096
MAX_DATUM_BYTES = 16 * 1024


def _require_int(value: Any, *, name: str, non_negative: bool = False) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{name} must be an int")
    if non_negative and value < 0:
        raise ValueError(f"{name} must be non-negative")
    return int(value)


def _require_dict_str_keys(value: Any, *, name: str) -> Dict[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{name} must be an object")
    for k in value.keys():
        if not isinstance(k, str):
            raise ValueError(f"{name} keys must be strings")
    return dict(value)


def _require_list(value: Any, *, name: str) -> List[Any]:
    if not isinstance(value, list):
        raise ValueError(f"{name} must be a list")
    if len(value) > MAX_LIST_ITEMS:
        raise ValueError(f"{name} too large")
    return value


def _hex(value: Any, *, name: str, nbytes: Optional[int] = None, max_bytes: int = 64) -> bytes:
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a hex string")
    try:
        return hex_to_bytes(value, name=name, nbytes=nbytes, max_bytes=max_bytes)
    except TypeError as exc:
        raise ValueError(str(exc)) from exc


def parse_out_ref(value: Any, *, name: str = "out_ref") -> TxOutRef:
    obj = _require_dict_str_keys(value, name=name)
    tx_id = _hex(obj.get("tx_id"), name=f"{name}.tx_id", nbytes=TX_ID_BYTES)
    index = _require_int(obj.get("index"), name=f"{name}.index", non_negative=True)
    return TxOutRef(tx_id=tx_id, index=index)


def parse_bundle(value: Any, *, name: str, signed: bool = False) -> AssetBundle:
    entries = _require_list(value, name=name)
    triples = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, list) or len(entry) != 3:
            raise ValueError(f"{name}[{i}] must be [policy, name, quantity]")
        policy_id = _hex(entry[0], name=f"{name}[{i}].policy")
        asset_name = _hex(entry[1], name=f"{name}[{i}].name", max_bytes=32)
        quantity = _require_int(entry[2], name=f"{name}[{i}].quantity", non_negative=not signed)
        triples.append((policy_id, asset_name, quantity))
    return AssetBundle.from_triples(triples, signed=signed)


def parse_datum(value: Any, *, name: str = "datum") -> Datum:
    if value is None:
        return NoDatum()
    obj = _require_dict_str_keys(value, name=name)
    if set(obj) == {"inline"}:
        return InlineDatum(data=_hex(obj["inline"], name=f"{name}.inline", max_bytes=MAX_DATUM_BYTES))
    if set(obj) == {"hash"}:
        return DatumHash(datum_hash=_hex(obj["hash"], name=f"{name}.hash", nbytes=32))
    raise ValueError(f"{name} must be null, {{'inline': hex}} or {{'hash': hex}}")


def parse_address(value: Any, *, name: str = "address") -> Address:
    obj = _require_dict_str_keys(value, name=name)
    payment = _hex(obj.get("payment"), name=f"{name}.payment")
    stake_raw = obj.get("stake")
    stake = None if stake_raw is None else _hex(stake_raw, name=f"{name}.stake")
    return Address(payment_credential=payment, stake_credential=stake)


def parse_output(value: Any, *, name: str = "output") -> TxOut:
    obj = _require_dict_str_keys(value, name=name)
    return TxOut(
        address=parse_address(obj.get("address"), name=f"{name}.address"),
        value=parse_bundle(obj.get("value", []), name=f"{name}.value"),
        datum=parse_datum(obj.get("datum"), name=f"{name}.datum"),
    )


def parse_transaction(value: Any) -> TransactionInfo:
    """Parse a JSON transaction document into a TransactionInfo."""
    obj = _require_dict_str_keys(value, name="tx")
    inputs = []
    for i, entry in enumerate(_require_list(obj.get("inputs", []), name="tx.inputs")):
        entry_obj = _require_dict_str_keys(entry, name=f"tx.inputs[{i}]")
        inputs.append(
            TxInInfo(
                out_ref=parse_out_ref(entry_obj.get("out_ref"), name=f"tx.inputs[{i}].out_ref"),
                resolved=parse_output(entry_obj.get("output"), name=f"tx.inputs[{i}].output"),
            )
        )
    refs = [tx_in.out_ref for tx_in in inputs]
    if len(set(refs)) != len(refs):
        raise ValueError("tx.inputs contains the same out_ref twice")
    outputs = [
        parse_output(entry, name=f"tx.outputs[{i}]")
        for i, entry in enumerate(_require_list(obj.get("outputs", []), name="tx.outputs"))
    ]
    mint = parse_bundle(obj.get("mint", []), name="tx.mint", signed=True)
    return TransactionInfo(inputs=tuple(inputs), outputs=tuple(outputs), mint=mint)


@dataclass(frozen=True)
class SpendRequest:
    prior_record: Optional[bytes]
    redeemer: bytes
    own_ref: TxOutRef
    tx: TransactionInfo


@dataclass(frozen=True)
class IssuanceRequest:
    redeemer: bytes
    pool_identity: bytes
    tx: TransactionInfo


ValidationRequest = Union[SpendRequest, IssuanceRequest]


def parse_request(value: Any) -> ValidationRequest:
    """
    Parse a validation envelope.

    {"kind": "spend", "prior_record": hex | null, "redeemer": hex, "own_ref": {...}, "tx": {...}}
    {"kind": "issuance", "redeemer": hex, "pool_identity": hex, "tx": {...}}
    """
    obj = _require_dict_str_keys(value, name="request")
    kind = obj.get("kind")
    if kind == "spend":
        prior_raw = obj.get("prior_record")
        prior = None if prior_raw is None else _hex(prior_raw, name="prior_record", max_bytes=MAX_DATUM_BYTES)
        return SpendRequest(
            prior_record=prior,
            redeemer=_hex(obj.get("redeemer"), name="redeemer", max_bytes=MAX_DATUM_BYTES),
            own_ref=parse_out_ref(obj.get("own_ref"), name="own_ref"),
            tx=parse_transaction(obj.get("tx")),
        )
    if kind == "issuance":
        return IssuanceRequest(
            redeemer=_hex(obj.get("redeemer"), name="redeemer", max_bytes=MAX_DATUM_BYTES),
            pool_identity=_hex(obj.get("pool_identity"), name="pool_identity"),
            tx=parse_transaction(obj.get("tx")),
        )
    raise ValueError(f"request.kind must be 'spend' or 'issuance', got {kind!r}")


def _bundle_to_json(bundle: AssetBundle) -> List[List[Any]]:
    return [[asset.policy_id.hex(), asset.name.hex(), qty] for asset, qty in bundle.items()]


def output_to_json(out: TxOut) -> Dict[str, Any]:
    datum: Optional[Dict[str, str]] = None
    if isinstance(out.datum, InlineDatum):
        datum = {"inline": out.datum.data.hex()}
    elif isinstance(out.datum, DatumHash):
        datum = {"hash": out.datum.datum_hash.hex()}
    stake = out.address.stake_credential
    return {
        "address": {
            "payment": out.address.payment_credential.hex(),
            "stake": None if stake is None else stake.hex(),
        },
        "value": _bundle_to_json(out.value),
        "datum": datum,
    }


def transaction_to_json(tx: TransactionInfo) -> Dict[str, Any]:
    """Inverse of `parse_transaction`; bundles are emitted in canonical order."""
    return {
        "inputs": [
            {
                "out_ref": {"tx_id": tx_in.out_ref.tx_id.hex(), "index": tx_in.out_ref.index},
                "output": output_to_json(tx_in.resolved),
            }
            for tx_in in tx.inputs
        ],
        "outputs": [output_to_json(out) for out in tx.outputs],
        "mint": _bundle_to_json(tx.mint),
    }
