#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Main CLI for voucher-ledger."""

from __future__ import annotations

import argparse
import logging

from voucher_ledger import commands
from voucher_ledger.utils import LedgerError, handle_error


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="voucher-ledger",
        description="Voucher computation, validation and posting CLI",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", default=None, help="Voucher config JSON path")
    common.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (logs go to stderr)",
    )

    subparsers = parser.add_subparsers(dest="command")

    commands.add_compute_parser(subparsers, [common])
    commands.add_validate_parser(subparsers, [common])
    commands.add_post_parser(subparsers, [common])
    commands.add_ledger_parser(subparsers, [common])
    commands.add_export_parser(subparsers, [common])

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        args.func(args)
    except LedgerError as exc:
        handle_error(exc)


if __name__ == "__main__":
    main()
