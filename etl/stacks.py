# etl/stacks.py
"""
Normalize Stacks API transactions (confirmed, mempool, transfer listing)
into StxTransactionData / StxMempoolTransactionData.
"""
from __future__ import annotations

import json
import logging
from decimal import Decimal
from typing import Any, Dict, Optional

from common.utils import first_present
from etl.records import StxMempoolTransactionData, StxTransactionData, TokenTransfer
from ingestion.parser import (
    parse_stx_mempool_transaction,
    parse_stx_transaction,
    parse_stx_transfer_transaction,
)
from ingestion.schemas import PostCondition, StxBaseTransaction

logger = logging.getLogger(__name__)

TOKEN_TRANSFER = "token_transfer"
CONTRACT_CALL = "contract_call"
FUNGIBLE = "fungible"


def _asset_id(pc: PostCondition) -> Optional[str]:
    # repr carries a one character type marker ahead of the identifier
    if pc.asset_value is not None and pc.asset_value.repr:
        return pc.asset_value.repr[1:]
    return None


def _derived_fields(tx: StxBaseTransaction, stx_address: str) -> Dict[str, Any]:
    """
    Fields shared by confirmed and mempool records: direction, amount,
    token transfer, post-condition token metadata and contract call.
    """
    out: Dict[str, Any] = {
        "incoming": tx.sender_address != stx_address,
        "amount": Decimal(0),
    }

    if tx.tx_type == TOKEN_TRANSFER and tx.token_transfer is not None:
        amount = Decimal(tx.token_transfer.amount)
        out["token_transfer"] = TokenTransfer(
            recipient_address=tx.token_transfer.recipient_address,
            amount=amount,
            memo=tx.token_transfer.memo,
        )
        out["amount"] = amount

    elif tx.tx_type == CONTRACT_CALL and tx.contract_call is not None:
        out["contract_call"] = tx.contract_call
        # only the first post-condition is inspected; multi-asset transfers
        # report the first asset's movement
        pc = first_present(tx.post_conditions)
        if tx.contract_call.function_name == "transfer" and pc is not None:
            out["token_type"] = pc.type
            if pc.type == FUNGIBLE:
                out["amount"] = Decimal(pc.amount or 0)
            if pc.asset is not None:
                out["token_name"] = pc.asset.asset_name
            out["asset_id"] = _asset_id(pc)

    logger.debug("stx tx %s type=%s incoming=%s amount=%s", tx.tx_id, tx.tx_type, out["incoming"], out["amount"])
    return out


def _common_fields(tx: StxBaseTransaction) -> Dict[str, Any]:
    return {
        "fee": Decimal(tx.fee_rate),
        "nonce": tx.nonce,
        "post_condition_mode": tx.post_condition_mode,
        "sender_address": tx.sender_address,
        "sponsored": tx.sponsored,
        "txid": tx.tx_id,
        "tx_status": tx.tx_status,
        "tx_type": tx.tx_type,
    }


def _block_fields(tx) -> Dict[str, Any]:
    return {
        "block_hash": tx.block_hash,
        "block_height": tx.block_height,
        "burn_block_time": tx.burn_block_time,
        "burn_block_time_iso": tx.burn_block_time_iso,
        "canonical": tx.canonical,
        "tx_index": tx.tx_index,
        "tx_results": json.dumps(tx.tx_result) if tx.tx_result is not None else None,
        "seen_time": tx.burn_block_time_iso,
    }


def parse_stx_transaction_data(tx, stx_address: str) -> StxTransactionData:
    tx = parse_stx_transaction(tx)
    return StxTransactionData(
        **_common_fields(tx),
        **_block_fields(tx),
        **_derived_fields(tx, stx_address),
    )


def parse_mempool_stx_transaction_data(tx, stx_address: str) -> StxMempoolTransactionData:
    tx = parse_stx_mempool_transaction(tx)
    return StxMempoolTransactionData(
        **_common_fields(tx),
        receipt_time=tx.receipt_time,
        receipt_time_iso=tx.receipt_time_iso,
        seen_time=tx.receipt_time_iso,
        **_derived_fields(tx, stx_address),
    )


def map_transfer_transaction_data(tx, stx_address: str) -> StxTransactionData:
    """
    Map an entry of the address transactions-with-transfers listing.

    Amount and token metadata come from the first post-condition whatever
    the transaction type.
    """
    tx = parse_stx_transfer_transaction(tx)
    pc = first_present(tx.post_conditions)
    amount = Decimal(0)
    if pc is not None and pc.type == FUNGIBLE:
        amount = Decimal(pc.amount or 0)
    return StxTransactionData(
        **_common_fields(tx),
        **_block_fields(tx),
        incoming=tx.sender_address != stx_address,
        amount=amount,
        token_type=pc.type if pc is not None else None,
        token_name=pc.asset.asset_name if pc is not None and pc.asset is not None else None,
        asset_id=_asset_id(pc) if pc is not None else None,
        contract_call=tx.contract_call if tx.tx_type == CONTRACT_CALL else None,
    )
