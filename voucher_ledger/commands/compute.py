#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""voucher-ledger compute command."""

from __future__ import annotations

from voucher_ledger.config import load_voucher_config
from voucher_ledger.services import compute_document
from voucher_ledger.utils import load_json_input, print_json


def add_parser(subparsers, parents):
    parser = subparsers.add_parser(
        "compute", help="Compute voucher totals and balancing lines", parents=parents
    )
    parser.set_defaults(func=run)
    return parser


def run(args):
    data = load_json_input()
    config = load_voucher_config(args.config)
    computation = compute_document(data, config)
    print_json(computation.to_dict())
