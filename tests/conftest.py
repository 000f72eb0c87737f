from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping, Optional

import pytest

from ammpool.config import DEFAULT_CONFIG, ProtocolConfig
from ammpool.core.actions import PoolReserves
from ammpool.core.issuance import derive_shares_asset_name, encode_issuance_redeemer, validate_issuance
from ammpool.core.redeemers import PoolRedeemer, encode_redeemer
from ammpool.core.spend import validate_spend
from ammpool.core.types import Verdict
from ammpool.state.assets import AssetBundle, AssetClass
from ammpool.state.ledger import Address, Datum, InlineDatum, TransactionInfo, TxInInfo, TxOut, TxOutRef
from ammpool.state.pool_record import PoolRecord

POOL_ID = bytes.fromhex("a1" * 28)
USER_KEY = bytes.fromhex("0c" * 28)
A_POLICY = bytes.fromhex("11" * 28)
B_POLICY = bytes.fromhex("22" * 28)

SEED = TxOutRef(tx_id=bytes.fromhex("5e" * 32), index=3)
POOL_REF = TxOutRef(tx_id=bytes.fromhex("70" * 32), index=0)
USER_REF = TxOutRef(tx_id=bytes.fromhex("71" * 32), index=1)

TOKEN_A = AssetClass(A_POLICY, b"ALPHA")
TOKEN_B = AssetClass(B_POLICY, b"TOKEN")
SHARES_NAME = derive_shares_asset_name(SEED)


def user_output(base: int = 50_000_000) -> TxOut:
    return TxOut(address=Address(USER_KEY), value=AssetBundle({DEFAULT_CONFIG.base_asset: base}))


@dataclass(frozen=True)
class PoolKit:
    """Builds pool state objects and transactions around one pool record."""

    record: PoolRecord
    identity: bytes = POOL_ID
    config: ProtocolConfig = DEFAULT_CONFIG

    pool_ref = POOL_REF
    user_ref = USER_REF
    seed = SEED

    @property
    def is_base(self) -> bool:
        return self.record.is_base_asset_pool(self.config.base_policy_id)

    @property
    def share(self) -> AssetClass:
        return self.record.share_asset(self.identity)

    @property
    def marker(self) -> AssetClass:
        return self.config.marker_asset(self.identity)

    @property
    def address(self) -> Address:
        return Address(self.identity)

    def counter_for(self, circulating: int) -> int:
        return self.config.max_shares - circulating

    def value(
        self,
        *,
        a: int,
        b: int,
        shares: int,
        base: Optional[int] = None,
        marker: int = 1,
        extra: Optional[Mapping[AssetClass, int]] = None,
    ) -> AssetBundle:
        """State-object value; `a` is the tradable reserve (floor excluded on base-asset pools)."""
        floor = self.config.reserve_floor
        triples = []
        if self.is_base:
            triples.append((self.config.base_policy_id, self.config.base_asset_name, floor + a if base is None else base))
        else:
            triples.append((self.config.base_policy_id, self.config.base_asset_name, floor if base is None else base))
            triples.append((self.record.a_asset.policy_id, self.record.a_asset.name, a))
        triples.append((self.record.b_asset.policy_id, self.record.b_asset.name, b))
        triples.append((self.identity, self.share.name, shares))
        triples.append((self.identity, self.marker.name, marker))
        for asset, amount in (extra or {}).items():
            triples.append((asset.policy_id, asset.name, amount))
        return AssetBundle.from_triples(triples)

    def value_of(self, reserves: PoolReserves) -> AssetBundle:
        return self.value(a=reserves.a, b=reserves.b, shares=reserves.shares, base=reserves.base)

    def reserves(self, *, a: int, b: int, shares: int) -> PoolReserves:
        base = a + self.config.reserve_floor if self.is_base else self.config.reserve_floor
        return PoolReserves(a=a, b=b, shares=shares, base=base)

    def state_output(
        self,
        value: AssetBundle,
        *,
        record: Optional[PoolRecord] = None,
        datum: Optional[Datum] = None,
        address: Optional[Address] = None,
    ) -> TxOut:
        if datum is None:
            datum = InlineDatum((record or self.record).to_bytes())
        return TxOut(address=address or self.address, value=value, datum=datum)

    def spend_tx(
        self,
        pre: AssetBundle,
        post: AssetBundle,
        *,
        post_output: Optional[TxOut] = None,
        extra_inputs: tuple[TxInInfo, ...] = (),
        extra_outputs: tuple[TxOut, ...] = (),
    ) -> TransactionInfo:
        inputs = (
            TxInInfo(POOL_REF, self.state_output(pre)),
            TxInInfo(USER_REF, user_output()),
        ) + extra_inputs
        outputs = (post_output or self.state_output(post), user_output(1_000_000)) + extra_outputs
        return TransactionInfo(inputs=inputs, outputs=outputs)

    def spend(
        self,
        redeemer: PoolRedeemer,
        pre: AssetBundle,
        post: AssetBundle,
        *,
        own_ref: TxOutRef = POOL_REF,
        **tx_kwargs,
    ) -> Verdict:
        tx = self.spend_tx(pre, post, **tx_kwargs)
        return validate_spend(
            self.record.to_bytes(), encode_redeemer(redeemer), own_ref, tx, config=self.config
        )

    def issuance_mint(self, *, marker: int = 1, shares: Optional[int] = None) -> AssetBundle:
        if shares is None:
            shares = self.config.max_shares - self.config.burned_shares
        return AssetBundle.from_triples(
            [(self.identity, self.marker.name, marker), (self.identity, self.share.name, shares)],
            signed=True,
        )

    def issuance_tx(
        self,
        *,
        a: int,
        b: int,
        shares: Optional[int] = None,
        value: Optional[AssetBundle] = None,
        mint: Optional[AssetBundle] = None,
        consume_seed: bool = True,
    ) -> TransactionInfo:
        if value is None:
            if shares is None:
                shares = self.counter_for(math.isqrt(a * b))
            value = self.value(a=a, b=b, shares=shares)
        funding_ref = SEED if consume_seed else USER_REF
        creator_shares = AssetBundle.from_triples(
            [(self.identity, self.share.name, self.config.max_shares - self.config.burned_shares)]
        )
        return TransactionInfo(
            inputs=(TxInInfo(funding_ref, user_output()),),
            outputs=(self.state_output(value), TxOut(address=Address(USER_KEY), value=creator_shares)),
            mint=self.issuance_mint() if mint is None else mint,
        )

    def issue(self, *, seed: TxOutRef = SEED, **tx_kwargs) -> Verdict:
        tx = self.issuance_tx(**tx_kwargs)
        return validate_issuance(encode_issuance_redeemer(seed), self.identity, tx, config=self.config)


def make_record(a_asset: AssetClass, b_asset: AssetClass, *, fee_points: int = 3, fee_basis: int = 1000) -> PoolRecord:
    return PoolRecord(
        a_asset=a_asset,
        b_asset=b_asset,
        swap_fee_points=fee_points,
        fee_basis=fee_basis,
        shares_asset_name=SHARES_NAME,
    )


@pytest.fixture
def token_pool() -> PoolKit:
    """Pool trading two issued tokens; the base asset only sits there as the floor."""
    return PoolKit(record=make_record(TOKEN_A, TOKEN_B))


@pytest.fixture
def base_pool() -> PoolKit:
    """Pool whose A side is the chain's base asset."""
    return PoolKit(record=make_record(DEFAULT_CONFIG.base_asset, TOKEN_B))
