#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""voucher-ledger post command."""

from __future__ import annotations

from voucher_ledger.balancer import balance_lines
from voucher_ledger.config import load_voucher_config
from voucher_ledger.models import VoucherKind
from voucher_ledger.posting import post_voucher, resolve_posting_accounts
from voucher_ledger.services import (
    build_calculator,
    parse_chart,
    parse_discount,
    parse_entries,
    parse_kind,
)
from voucher_ledger.utils import load_json_input, print_json
from voucher_ledger.validation import ensure_valid


def add_parser(subparsers, parents):
    parser = subparsers.add_parser(
        "post", help="Turn a voucher into balanced journal lines", parents=parents
    )
    parser.set_defaults(func=run)
    return parser


def run(args):
    data = load_json_input()
    config = load_voucher_config(args.config)
    kind = parse_kind(data)
    party_id = data.get("party_id")

    calculator = build_calculator(kind, config, data)
    entries = parse_entries(kind, data)
    ensure_valid(
        calculator.validate(entries, party_id=party_id, require_party=not kind.uses_lines)
    )
    computation = calculator.compute(entries, parse_discount(data))

    accounts = None
    if kind != VoucherKind.JOURNAL:
        accounts = resolve_posting_accounts(
            parse_chart(data),
            config,
            include_adjustment=kind == VoucherKind.OPENING_BALANCE,
        )
    lines = post_voucher(computation, accounts, party_id)
    totals = balance_lines(lines)

    print_json(
        {
            "kind": kind.value,
            "lines": [line.to_dict() for line in lines],
            "total_debit": totals.total_debit,
            "total_credit": totals.total_credit,
        }
    )
