# etl/records.py
"""
Canonical wallet transaction records.

Records are frozen once built; amounts are Decimal so sums and
differences over integer chain units stay exact.
"""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from ingestion.schemas import ContractCallPayload, EsploraVin, EsploraVout


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class BtcTransactionData(_Record):
    block_hash: str
    block_height: int
    txid: str
    total: int
    fees: int
    size: int
    confirmed: bool
    inputs: Tuple[EsploraVin, ...]
    outputs: Tuple[EsploraVout, ...]
    seen_time: datetime
    incoming: bool
    amount: Decimal
    tx_type: Literal["bitcoin"] = "bitcoin"
    tx_status: Literal["success", "pending"]
    is_ordinal: bool
    recipient_address: Optional[str] = None


class TokenTransfer(_Record):
    recipient_address: str
    amount: Decimal
    memo: Optional[str] = None


class _StxRecord(_Record):
    fee: Decimal
    nonce: int
    post_condition_mode: Optional[str] = None
    sender_address: str
    sponsored: bool
    txid: str
    tx_status: str
    tx_type: str
    seen_time: datetime
    incoming: bool
    amount: Decimal = Decimal(0)
    token_transfer: Optional[TokenTransfer] = None
    token_type: Optional[str] = None
    token_name: Optional[str] = None
    asset_id: Optional[str] = None
    contract_call: Optional[ContractCallPayload] = None


class StxTransactionData(_StxRecord):
    block_hash: str
    block_height: int
    burn_block_time: int
    burn_block_time_iso: datetime
    canonical: bool
    tx_index: int
    tx_results: Optional[str] = None


class StxMempoolTransactionData(_StxRecord):
    receipt_time: int
    receipt_time_iso: datetime
