# ingestion/schemas.py
"""
ingestion.schemas

Consumed shapes of the esplora explorer and Stacks API payloads.
Only the fields the normalizers read are declared; anything else the
APIs send is ignored. Models are frozen and sequences are tuples, so
records built from them cannot be changed through a shared reference.
"""
from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Annotated, Any, Dict, Optional, Tuple

from pydantic import AfterValidator, BaseModel, ConfigDict


def _decimal_string(v: str) -> str:
    try:
        d = Decimal(v)
    except InvalidOperation:
        raise ValueError(f"not a decimal amount: {v!r}")
    if not d.is_finite():
        raise ValueError(f"not a finite amount: {v!r}")
    return v


# chain amounts arrive as strings of integer smallest units
DecimalStr = Annotated[str, AfterValidator(_decimal_string)]


class _Raw(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


# --- esplora (bitcoin) ---

class EsploraPrevout(_Raw):
    scriptpubkey_address: Optional[str] = None
    value: int


class EsploraVin(_Raw):
    txid: Optional[str] = None
    vout: Optional[int] = None
    # coinbase inputs carry no prevout
    prevout: Optional[EsploraPrevout] = None


class EsploraVout(_Raw):
    scriptpubkey_address: Optional[str] = None
    value: int


class EsploraStatus(_Raw):
    confirmed: bool
    block_hash: Optional[str] = None
    block_height: Optional[int] = None
    block_time: Optional[int] = None


class EsploraTransaction(_Raw):
    txid: str
    fee: int
    size: int
    status: EsploraStatus
    vin: Tuple[EsploraVin, ...]
    vout: Tuple[EsploraVout, ...]


# --- stacks ---

class TokenTransferPayload(_Raw):
    recipient_address: str
    amount: DecimalStr
    memo: Optional[str] = None


class ContractCallPayload(_Raw):
    contract_id: Optional[str] = None
    function_name: str
    function_signature: Optional[str] = None
    function_args: Optional[Tuple[Dict[str, Any], ...]] = None


class PostConditionAsset(_Raw):
    asset_name: Optional[str] = None
    contract_address: Optional[str] = None
    contract_name: Optional[str] = None


class AssetValue(_Raw):
    hex: Optional[str] = None
    repr: Optional[str] = None


class PostCondition(_Raw):
    type: str
    condition_code: Optional[str] = None
    amount: Optional[DecimalStr] = None
    asset: Optional[PostConditionAsset] = None
    asset_value: Optional[AssetValue] = None


class StxBaseTransaction(_Raw):
    tx_id: str
    tx_type: str
    tx_status: str
    fee_rate: DecimalStr
    nonce: int
    sender_address: str
    sponsored: bool = False
    post_condition_mode: Optional[str] = None
    post_conditions: Tuple[Optional[PostCondition], ...] = ()
    token_transfer: Optional[TokenTransferPayload] = None
    contract_call: Optional[ContractCallPayload] = None


class StxTransaction(StxBaseTransaction):
    block_hash: str
    block_height: int
    burn_block_time: int
    burn_block_time_iso: str
    canonical: bool = True
    tx_index: int
    tx_result: Optional[Dict[str, Any]] = None


class StxMempoolTransaction(StxBaseTransaction):
    receipt_time: int
    receipt_time_iso: str


class StxTransferTransaction(StxTransaction):
    """Entry of the address transactions-with-transfers listing."""
