"""
common.logging_setup

Set up standard logging for the project. Records go to stdout from the
CLI, so log lines are kept on stderr.
"""
import logging
import os
import sys
from typing import Optional


def setup_logging(level: Optional[int] = None):
    if level is None:
        level = getattr(logging, os.getenv("WALLET_TX_LOG_LEVEL", "INFO").upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )
