# etl/amounts.py
from typing import Iterable

from ingestion.schemas import EsploraVin, EsploraVout


def sum_outputs_for_address(outputs: Iterable[EsploraVout], address: str) -> int:
    """
    Sum of output values paid to address. Outputs without an address never match.
    """
    return sum(
        out.value
        for out in outputs
        if out.scriptpubkey_address is not None and out.scriptpubkey_address == address
    )


def sum_inputs_for_address(inputs: Iterable[EsploraVin], address: str) -> int:
    """
    Sum of previous-output values spent from address.
    """
    total = 0
    for vin in inputs:
        prev = vin.prevout
        if prev is None or prev.scriptpubkey_address is None:
            continue
        if prev.scriptpubkey_address == address:
            total += prev.value
    return total
