# ingestion/fetcher.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from common.network import StacksNetwork
from common.settings import Settings, get_settings
from etl.urls import get_network_url
from ingestion.parser import unwrap_results

logger = logging.getLogger(__name__)


def _get_json(url: str, params: Optional[Dict[str, Any]] = None, settings: Optional[Settings] = None) -> Any:
    st = settings or get_settings()
    try:
        resp = requests.get(url, params=params, timeout=st.fetch.timeout)
        resp.raise_for_status()
        return resp.json()
    except requests.RequestException as e:
        raise RuntimeError(f"HTTP request failed url={url}") from e


def _require_address(address: str) -> None:
    if not isinstance(address, str) or not address:
        raise ValueError("address must be a non empty string")


def fetch_btc_transactions(address: str, settings: Optional[Settings] = None) -> List[dict]:
    _require_address(address)
    st = settings or get_settings()
    url = f"{st.endpoints.esplora.rstrip('/')}/address/{address}/txs"
    result = _get_json(url, settings=st)
    if not isinstance(result, list):
        raise RuntimeError("esplora response for address txs did not return a list")
    logger.info("fetched %d btc transactions for %s", len(result), address)
    return result


def fetch_stx_transactions(
    address: str,
    network: StacksNetwork,
    offset: int = 0,
    settings: Optional[Settings] = None,
) -> List[dict]:
    _require_address(address)
    st = settings or get_settings()
    url = f"{get_network_url(network, st)}/extended/v1/address/{address}/transactions"
    result = _get_json(url, params={"limit": st.fetch.page_limit, "offset": offset}, settings=st)
    rows = unwrap_results(result)
    logger.info("fetched %d stx transactions for %s", len(rows), address)
    return rows


def fetch_stx_mempool_transactions(
    address: str,
    network: StacksNetwork,
    settings: Optional[Settings] = None,
) -> List[dict]:
    _require_address(address)
    st = settings or get_settings()
    url = f"{get_network_url(network, st)}/extended/v1/tx/mempool"
    result = _get_json(url, params={"address": address, "limit": st.fetch.page_limit}, settings=st)
    rows = unwrap_results(result)
    logger.info("fetched %d mempool stx transactions for %s", len(rows), address)
    return rows


__all__ = [
    "fetch_btc_transactions",
    "fetch_stx_transactions",
    "fetch_stx_mempool_transactions",
]
