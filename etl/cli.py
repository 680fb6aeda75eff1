import argparse
import json
import logging
import sys

from common.logging_setup import setup_logging
from common.network import StacksNetwork
from common.settings import get_settings
from etl.bitcoin import parse_btc_transaction_data, parse_ordinals_btc_transaction
from etl.stacks import (
    map_transfer_transaction_data,
    parse_mempool_stx_transaction_data,
    parse_stx_transaction_data,
)
from ingestion import fetcher
from ingestion.parser import unwrap_results

KINDS = ["btc", "ordinals", "stx", "stx-mempool", "stx-transfer"]


def _mapper(args):
    if args.kind == "btc":
        return lambda tx: parse_btc_transaction_data(tx, args.address, args.ordinals_address)
    if args.kind == "ordinals":
        return lambda tx: parse_ordinals_btc_transaction(tx, args.address)
    if args.kind == "stx":
        return lambda tx: parse_stx_transaction_data(tx, args.address)
    if args.kind == "stx-mempool":
        return lambda tx: parse_mempool_stx_transaction_data(tx, args.address)
    return lambda tx: map_transfer_transaction_data(tx, args.address)


def _load_rows(args):
    if args.input:
        with open(args.input, "r", encoding="utf-8") as f:
            return unwrap_results(json.load(f))

    network = StacksNetwork.from_settings(get_settings())
    if args.kind in ("btc", "ordinals"):
        return fetcher.fetch_btc_transactions(args.address)
    if args.kind == "stx":
        return fetcher.fetch_stx_transactions(args.address, network)
    return fetcher.fetch_stx_mempool_transactions(args.address, network)


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Normalize wallet transactions into canonical records")
    p.add_argument("--kind", choices=KINDS, required=True, help="Payload kind")
    p.add_argument("--address", required=True, help="Owned address")
    p.add_argument("--ordinals-address", dest="ordinals_address", default=None,
                   help="Ordinals address (required for --kind btc)")
    p.add_argument("--input", default=None,
                   help="JSON file with a list or a {'results': [...]} envelope; fetched when omitted")
    p.add_argument("--verbose", action="store_true", help="Debug logging")
    args = p.parse_args(argv)
    if args.kind == "btc" and not args.ordinals_address:
        p.error("--ordinals-address is required for --kind btc")
    if args.kind == "stx-transfer" and not args.input:
        p.error("--input is required for --kind stx-transfer")

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    mapper = _mapper(args)

    try:
        rows = _load_rows(args)
        records = [mapper(tx) for tx in rows]
    except (OSError, ValueError, RuntimeError) as e:
        print(f"ERROR {e}", file=sys.stderr)
        return 2

    for rec in records:
        print(rec.model_dump_json())
    return 0


if __name__ == "__main__":
    sys.exit(main())
