# etl/urls.py
from typing import Optional

from common.network import StacksNetwork
from common.settings import Settings, get_settings


def get_network_url(network: StacksNetwork, settings: Optional[Settings] = None) -> str:
    """
    Stacks API base URL for the given network.
    """
    ep = (settings or get_settings()).endpoints
    return ep.hiro_mainnet if network.is_mainnet() else ep.hiro_testnet


def get_fetchable_url(uri: str, protocol: str, settings: Optional[Settings] = None) -> Optional[str]:
    """
    http URIs are returned unchanged, ipfs://<path> is rewritten to
    <gateway>/ipfs/<path>. Anything else yields None.
    """
    if protocol == "http":
        return uri
    if protocol == "ipfs":
        parts = uri.split("//", 1)
        if len(parts) < 2 or not parts[1]:
            return None
        gateway = (settings or get_settings()).endpoints.ipfs_gateway.rstrip("/")
        return f"{gateway}/ipfs/{parts[1]}"
    return None


def get_ordinal_image_url(content: str, settings: Optional[Settings] = None) -> Optional[str]:
    base = (settings or get_settings()).endpoints.ordinals
    return get_fetchable_url(f"{base}{content}", "http")
