# ingestion/parser.py
"""
ingestion.parser
Validate raw explorer / Stacks API JSON into typed models.
"""
from typing import Any, Dict, List, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from ingestion.schemas import (
    EsploraTransaction,
    StxMempoolTransaction,
    StxTransaction,
    StxTransferTransaction,
)

M = TypeVar("M", bound=BaseModel)


def _validate(model: Type[M], raw: Union[Dict[str, Any], M], what: str) -> M:
    if isinstance(raw, model):
        return raw
    if not isinstance(raw, dict) or not raw:
        raise ValueError(f"Invalid {what} JSON")
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise ValueError(f"Invalid {what} JSON: {e}") from e


def parse_btc_transaction(tx_json) -> EsploraTransaction:
    return _validate(EsploraTransaction, tx_json, "bitcoin transaction")


def parse_stx_transaction(tx_json) -> StxTransaction:
    return _validate(StxTransaction, tx_json, "stacks transaction")


def parse_stx_mempool_transaction(tx_json) -> StxMempoolTransaction:
    return _validate(StxMempoolTransaction, tx_json, "stacks mempool transaction")


def parse_stx_transfer_transaction(tx_json) -> StxTransferTransaction:
    # the listing nests the transaction under "tx"
    if isinstance(tx_json, dict) and isinstance(tx_json.get("tx"), dict):
        tx_json = tx_json["tx"]
    return _validate(StxTransferTransaction, tx_json, "stacks transfer transaction")


def unwrap_results(payload: Any) -> List[Dict[str, Any]]:
    """
    Accept a bare JSON list or a paginated {"results": [...]} envelope.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("results"), list):
        return payload["results"]
    raise ValueError("Expected a JSON list or an object with a 'results' list")
