# etl/dedupe.py
from typing import Iterable, List

from etl.records import StxMempoolTransactionData, StxTransactionData


def dedupe_pending_transactions(
    confirmed: Iterable[StxTransactionData],
    pending: Iterable[StxMempoolTransactionData],
) -> List[StxMempoolTransactionData]:
    """
    Drop pending transactions that already appear among the confirmed ones.
    Pending order is preserved.
    """
    confirmed_ids = {tx.txid for tx in confirmed}
    return [tx for tx in pending if tx.txid not in confirmed_ids]
