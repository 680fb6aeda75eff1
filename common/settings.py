import os
from typing import Optional

from pydantic import BaseModel, field_validator, ValidationError

DEFAULT_HIRO_MAINNET = "https://stacks-node-api.mainnet.stacks.co"
DEFAULT_HIRO_TESTNET = "https://stacks-node-api.testnet.stacks.co"
DEFAULT_ESPLORA = "https://mempool.space/api"
DEFAULT_ORDINALS = "https://ordinals.com/content/"
DEFAULT_IPFS_GATEWAY = "https://cf-ipfs.com"

# field name -> (env override, built-in default)
_ENDPOINT_ENV = {
    "hiro_mainnet": ("HIRO_MAINNET_URL_OVERRIDE", DEFAULT_HIRO_MAINNET),
    "hiro_testnet": ("HIRO_TESTNET_URL_OVERRIDE", DEFAULT_HIRO_TESTNET),
    "esplora": ("ESPLORA_URL_OVERRIDE", DEFAULT_ESPLORA),
    "ordinals": ("ORDINALS_URL_OVERRIDE", DEFAULT_ORDINALS),
    "ipfs_gateway": ("IPFS_GATEWAY_OVERRIDE", DEFAULT_IPFS_GATEWAY),
}


class Endpoints(BaseModel):
    hiro_mainnet: str = DEFAULT_HIRO_MAINNET
    hiro_testnet: str = DEFAULT_HIRO_TESTNET
    esplora: str = DEFAULT_ESPLORA
    ordinals: str = DEFAULT_ORDINALS
    # gateway host only; "/ipfs/<path>" is appended when resolving
    ipfs_gateway: str = DEFAULT_IPFS_GATEWAY

    @field_validator("*", mode="before")
    @classmethod
    def must_be_https(cls, v, info):
        # placeholders left in config.yaml fall back to the built-in endpoint
        if isinstance(v, str) and "${" in v:
            return _ENDPOINT_ENV[info.field_name][1]
        if not isinstance(v, str) or not v.startswith("https://"):
            raise ValueError(f"{info.field_name} endpoint must be HTTPS")
        return v


class Fetch(BaseModel):
    timeout: int = 30
    page_limit: int = 50


class Settings(BaseModel):
    network: str = "mainnet"
    endpoints: Endpoints = Endpoints()
    fetch: Fetch = Fetch()

    @field_validator("network")
    @classmethod
    def known_network(cls, v: str) -> str:
        v = v.lower()
        if v not in ("mainnet", "testnet"):
            raise ValueError("network must be mainnet or testnet")
        return v


def load_settings(path: str = "config.yaml") -> Settings:
    import yaml
    cfg = {}
    if os.path.exists(path):
        with open(path, "r") as f:
            cfg = yaml.safe_load(f) or {}

    # allow secure override via env at runtime
    endpoints = dict(cfg.get("endpoints") or {})
    for field, (env_name, _default) in _ENDPOINT_ENV.items():
        env_val = os.environ.get(env_name)
        if env_val:
            endpoints[field] = env_val
    if endpoints:
        cfg["endpoints"] = endpoints

    try:
        return Settings.model_validate(cfg)
    except ValidationError as e:
        raise RuntimeError(f"Configuration error in {path}: {e}") from e


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = load_settings(os.environ.get("WALLET_TX_CONFIG", "config.yaml"))
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
