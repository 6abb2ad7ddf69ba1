#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Voucher configuration: adjustment account, posting accounts, policies."""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

from voucher_ledger.calculator import DEFAULT_POLICIES, VoucherPolicy
from voucher_ledger.models import TaxBase, VoucherKind
from voucher_ledger.utils import LedgerError

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).resolve().parent / "data" / "voucher_config.json"

DEFAULT_POSTING_ACCOUNTS = {
    "purchases": "5001",
    "sales": "4001",
    "input_tax": "1005",
    "output_tax": "2002",
    "discount_received": "4004",
    "discount_allowed": "5007",
}

DEFAULT_VOUCHER_CONFIG: Dict[str, Any] = {
    "adjustment_account_code": "3004",
    "adjustment_account_name": "Opening Balance Adjustment",
    "posting_accounts": DEFAULT_POSTING_ACCOUNTS,
    "policies": {},
}

POLICY_KEYS = ("signed_difference", "auto_balance", "tax_base")


def load_voucher_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    config_path = Path(path) if path else CONFIG_PATH
    if not config_path.exists():
        if path:
            raise LedgerError("CONFIG_INVALID", f"Config file not found: {config_path}")
        return _merge({})
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise LedgerError("CONFIG_INVALID", f"Voucher config is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise LedgerError("CONFIG_INVALID", "Voucher config must be a JSON object")
    logger.debug("loaded voucher config from %s", config_path)
    return _merge(data)


def _merge(data: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(DEFAULT_VOUCHER_CONFIG)
    merged.update({k: v for k, v in data.items() if k not in ("posting_accounts", "policies")})

    accounts = data.get("posting_accounts") or {}
    policies = data.get("policies") or {}
    if not isinstance(accounts, dict):
        raise LedgerError("CONFIG_INVALID", "posting_accounts must be an object")
    if not isinstance(policies, dict):
        raise LedgerError("CONFIG_INVALID", "policies must be an object")

    merged["posting_accounts"] = {**DEFAULT_POSTING_ACCOUNTS, **accounts}
    merged["policies"] = policies
    merged["adjustment_account_code"] = str(merged["adjustment_account_code"])
    return merged


def build_policies(config: Dict[str, Any]) -> Dict[VoucherKind, VoucherPolicy]:
    """Apply per-kind overrides from ``config["policies"]`` to the defaults."""
    policies = dict(DEFAULT_POLICIES)
    for kind_name, override in (config.get("policies") or {}).items():
        try:
            kind = VoucherKind(kind_name)
        except ValueError as exc:
            raise LedgerError("CONFIG_INVALID", f"Unknown voucher kind: {kind_name}") from exc
        if not isinstance(override, dict):
            raise LedgerError("CONFIG_INVALID", f"Policy for {kind_name} must be an object")
        unknown = set(override) - set(POLICY_KEYS)
        if unknown:
            raise LedgerError(
                "CONFIG_INVALID",
                f"Unknown policy keys for {kind_name}: {', '.join(sorted(unknown))}",
            )
        values = dict(override)
        if "tax_base" in values:
            try:
                values["tax_base"] = TaxBase(values["tax_base"])
            except ValueError as exc:
                raise LedgerError(
                    "CONFIG_INVALID", f"Unknown tax base: {values['tax_base']}"
                ) from exc
        for flag in ("signed_difference", "auto_balance"):
            if flag in values:
                values[flag] = bool(values[flag])
        policies[kind] = replace(policies[kind], **values)
    return policies
