#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""voucher-ledger export command."""

from __future__ import annotations

from voucher_ledger.config import load_voucher_config
from voucher_ledger.io import VoucherExcelWriter
from voucher_ledger.services import build_ledger_report, build_trial_balance, compute_document
from voucher_ledger.utils import load_json_input, print_json


def add_parser(subparsers, parents):
    parser = subparsers.add_parser("export", help="Export to an Excel workbook", parents=parents)
    parser.add_argument("--output", required=True, help="Path of the .xlsx file to write")
    parser.add_argument(
        "--report",
        choices=["voucher", "ledger", "trial_balance"],
        default="voucher",
        help="What the input document describes",
    )
    parser.set_defaults(func=run)
    return parser


def run(args):
    data = load_json_input()
    writer = VoucherExcelWriter()
    if args.report == "ledger":
        writer.write_ledger_report(build_ledger_report(data))
    elif args.report == "trial_balance":
        writer.write_trial_balance(build_trial_balance(data))
    else:
        config = load_voucher_config(args.config)
        writer.write_voucher(compute_document(data, config))
    print_json(writer.save(args.output))
