# etl/bitcoin.py
"""
Normalize esplora transactions into BtcTransactionData for a tracked address.

Direction is derived from the inputs: a transaction is incoming for an
address iff that address spent none of the inputs. Outgoing amounts
exclude change returned to the same address.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional, Set

from etl.amounts import sum_inputs_for_address, sum_outputs_for_address
from etl.records import BtcTransactionData
from ingestion.parser import parse_btc_transaction
from ingestion.schemas import EsploraTransaction

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def input_addresses(tx: EsploraTransaction) -> Set[str]:
    return {
        vin.prevout.scriptpubkey_address
        for vin in tx.vin
        if vin.prevout is not None and vin.prevout.scriptpubkey_address
    }


def _first_recipient(tx: EsploraTransaction, *tracked: str) -> Optional[str]:
    for out in tx.vout:
        addr = out.scriptpubkey_address
        if addr and addr not in tracked:
            return addr
    return None


def _net_amount(tx: EsploraTransaction, address: str, incoming: bool) -> int:
    if incoming:
        return sum_outputs_for_address(tx.vout, address)
    spent = sum_inputs_for_address(tx.vin, address)
    change = sum_outputs_for_address(tx.vout, address)
    return spent - change


def _seen_time(tx: EsploraTransaction) -> datetime:
    # epoch zero means "no block time yet", not a real timestamp
    if tx.status.block_time:
        return EPOCH + timedelta(seconds=tx.status.block_time)
    return EPOCH


def _build(
    tx: EsploraTransaction,
    address: str,
    is_ordinal: bool,
    recipient: Optional[str],
) -> BtcTransactionData:
    incoming = address not in input_addresses(tx)
    amount = _net_amount(tx, address, incoming)
    logger.debug("btc tx %s address=%s incoming=%s amount=%s", tx.txid, address, incoming, amount)
    return BtcTransactionData(
        block_hash=tx.status.block_hash or "",
        block_height=tx.status.block_height or 0,
        txid=tx.txid,
        total=tx.fee + amount,
        fees=tx.fee,
        size=tx.size,
        confirmed=tx.status.confirmed,
        inputs=tuple(tx.vin),
        outputs=tuple(tx.vout),
        seen_time=_seen_time(tx),
        incoming=incoming,
        amount=Decimal(amount),
        tx_status="success" if tx.status.confirmed else "pending",
        is_ordinal=is_ordinal,
        recipient_address=recipient,
    )


def parse_btc_transaction_data(tx, btc_address: str, ordinals_address: str) -> BtcTransactionData:
    """
    Map a payment-address transaction. is_ordinal is set when the ordinals
    address spent one of the inputs.
    """
    tx = parse_btc_transaction(tx)
    return _build(
        tx,
        btc_address,
        is_ordinal=ordinals_address in input_addresses(tx),
        recipient=_first_recipient(tx, btc_address, ordinals_address),
    )


def parse_ordinals_btc_transaction(tx, ordinals_address: str) -> BtcTransactionData:
    """
    Map a transaction from the ordinals address history.

    is_ordinal is always True here, even when the ordinals address only
    received change; callers reading it as "moved an inscription" should
    use parse_btc_transaction_data instead.
    """
    tx = parse_btc_transaction(tx)
    return _build(
        tx,
        ordinals_address,
        is_ordinal=True,
        recipient=_first_recipient(tx, ordinals_address),
    )
