"""
common.network

Stacks network descriptor.
"""
from dataclasses import dataclass

MAINNET = "mainnet"
TESTNET = "testnet"


@dataclass(frozen=True)
class StacksNetwork:
    name: str = MAINNET

    def __post_init__(self):
        if self.name not in (MAINNET, TESTNET):
            raise ValueError(f"Unknown Stacks network: {self.name!r}")

    def is_mainnet(self) -> bool:
        return self.name == MAINNET

    @classmethod
    def from_settings(cls, settings) -> "StacksNetwork":
        return cls(settings.network)
