#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""voucher-ledger validate command."""

from __future__ import annotations

from voucher_ledger.config import load_voucher_config
from voucher_ledger.services import build_calculator, parse_entries, parse_kind
from voucher_ledger.utils import load_json_input, print_json
from voucher_ledger.validation import ensure_valid


def add_parser(subparsers, parents):
    parser = subparsers.add_parser("validate", help="Check a voucher before saving", parents=parents)
    parser.add_argument(
        "--require-party",
        action="store_true",
        help="Reject invoices, payments and receipts without a party_id",
    )
    parser.set_defaults(func=run)
    return parser


def run(args):
    data = load_json_input()
    config = load_voucher_config(args.config)
    kind = parse_kind(data)
    calculator = build_calculator(kind, config, data)
    issues = calculator.validate(
        parse_entries(kind, data),
        party_id=data.get("party_id"),
        require_party=args.require_party,
    )
    ensure_valid(issues)
    print_json({"kind": kind.value, "valid": True, "issues": []})
