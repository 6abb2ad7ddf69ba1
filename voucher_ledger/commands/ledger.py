#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""voucher-ledger ledger command."""

from __future__ import annotations

from voucher_ledger.services import build_ledger_report, build_trial_balance
from voucher_ledger.utils import load_json_input, print_json


def add_parser(subparsers, parents):
    parser = subparsers.add_parser(
        "ledger", help="Account ledger with running balance", parents=parents
    )
    parser.add_argument(
        "--trial-balance",
        action="store_true",
        help="Debit and credit totals per account instead of one account's ledger",
    )
    parser.set_defaults(func=run)
    return parser


def run(args):
    data = load_json_input()
    if args.trial_balance:
        report = build_trial_balance(data)
    else:
        report = build_ledger_report(data)
    print_json(report.to_dict())
