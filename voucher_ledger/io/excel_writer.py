# -*- coding: utf-8 -*-
"""
Excel export

Writes computed vouchers, ledger reports and trial balances to a formatted workbook.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from voucher_ledger.calculator import VoucherComputation
from voucher_ledger.reporting import LedgerReport, TrialBalance

logger = logging.getLogger(__name__)

AMOUNT_FORMAT = "#,##0.00"

KIND_TITLES = {
    "journal": "Journal Voucher",
    "opening_balance": "Opening Balance",
    "purchase_invoice": "Purchase Invoice",
    "sales_invoice": "Sales Invoice",
    "purchase_return": "Purchase Return",
    "sales_return": "Sales Return",
    "payment": "Payment Voucher",
    "receipt": "Receipt Voucher",
}


class VoucherExcelWriter:
    """
    Excel export for vouchers

    Usage:
        writer = VoucherExcelWriter()
        writer.write_voucher(computation)
        writer.write_ledger_report(report)
        writer.save("output.xlsx")
    """

    def __init__(self):
        self.wb = Workbook()
        self.wb.remove(self.wb.active)

        self.title_font = Font(bold=True, size=14)
        self.header_font = Font(bold=True, size=11)
        self.header_fill = PatternFill(start_color="DAEEF3", end_color="DAEEF3", fill_type="solid")
        self.thin_border = Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin"),
        )

    def _set_column_widths(self, ws, widths: List[int]):
        for col, width in enumerate(widths, start=1):
            ws.column_dimensions[get_column_letter(col)].width = width

    def _write_title(self, ws, row, title):
        cell = ws.cell(row=row, column=1, value=title)
        cell.font = self.title_font
        return row + 1

    def _write_header_row(self, ws, row, headers):
        for i, header in enumerate(headers, start=1):
            cell = ws.cell(row=row, column=i, value=header)
            cell.font = self.header_font
            cell.fill = self.header_fill
            cell.border = self.thin_border
            cell.alignment = Alignment(horizontal="center")
        return row + 1

    def _write_data_row(self, ws, row, data, is_total=False):
        """Text cells align left, numbers right with two decimals."""
        for i, value in enumerate(data, start=1):
            cell = ws.cell(row=row, column=i, value=value)
            cell.border = self.thin_border
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                cell.number_format = AMOUNT_FORMAT
                cell.alignment = Alignment(horizontal="right")
            else:
                cell.alignment = Alignment(horizontal="left")
            if is_total:
                cell.font = Font(bold=True)
        return row + 1

    def _sheet_title(self, title: str) -> str:
        # Excel caps sheet names at 31 characters and they must be unique
        base = title[:31]
        name, n = base, 2
        while name in self.wb.sheetnames:
            suffix = f" ({n})"
            name = base[: 31 - len(suffix)] + suffix
            n += 1
        return name

    def write_voucher(self, computation: VoucherComputation, sheet_name: str = None):
        """
        Write one computed voucher

        Args:
            computation: result of VoucherLedgerCalculator.compute()
            sheet_name: worksheet name, defaults to the voucher kind title
        """
        kind = computation.kind.value
        title = KIND_TITLES[kind]
        ws = self.wb.create_sheet(title=self._sheet_title(sheet_name or title))
        row = self._write_title(ws, 1, title)
        row += 1

        totals = computation.totals
        if computation.kind.uses_lines:
            self._set_column_widths(ws, [30, 15, 15, 40])
            row = self._write_header_row(ws, row, ["Account", "Debit", "Credit", "Narration"])
            for line in computation.entries:
                row = self._write_data_row(
                    ws, row, [line.account_name, line.debit, line.credit, line.narration]
                )
            row = self._write_data_row(
                ws, row, ["Total", totals.total_debit, totals.total_credit, ""], is_total=True
            )
            status = "Balanced" if computation.is_balanced else f"Difference {totals.difference:.2f}"
            ws.cell(row=row + 1, column=1, value=status)

        elif computation.kind.uses_items:
            self._set_column_widths(ws, [28, 10, 12, 12, 12, 14, 12, 14])
            row = self._write_header_row(
                ws,
                row,
                ["Product", "Qty", "Rate", "Discount", "Taxable", "Tax %", "Tax", "Total"],
            )
            for item, amounts in zip(computation.entries, computation.line_amounts):
                row = self._write_data_row(
                    ws,
                    row,
                    [
                        item.product_name,
                        amounts.final_quantity,
                        item.rate,
                        amounts.discount,
                        amounts.taxable_amount,
                        item.tax_rate,
                        amounts.tax_amount,
                        amounts.total,
                    ],
                )
            row += 1
            for label, value in (
                ("Subtotal", totals.subtotal),
                (f"Discount ({totals.discount_rate:g}%)", totals.discount),
                ("Tax", totals.tax),
            ):
                row = self._write_data_row(ws, row, [label, value])
            self._write_data_row(ws, row, ["Grand Total", totals.grand_total], is_total=True)

        else:
            self._set_column_widths(ws, [30, 15, 10, 30])
            row = self._write_header_row(ws, row, ["Ledger", "Amount", "Tax %", "Remarks"])
            for item in computation.entries:
                row = self._write_data_row(
                    ws, row, [item.description, item.amount, item.tax_rate, item.remarks]
                )
            row += 1
            row = self._write_data_row(ws, row, ["Subtotal", totals.subtotal])
            row = self._write_data_row(ws, row, ["Tax", totals.tax])
            self._write_data_row(ws, row, ["Grand Total", totals.grand_total], is_total=True)

        return ws

    def write_ledger_report(self, report: LedgerReport, sheet_name: str = None):
        account = report.account
        ws = self.wb.create_sheet(title=self._sheet_title(sheet_name or f"Ledger {account.code}"))
        self._set_column_widths(ws, [12, 14, 18, 36, 14, 14, 18])

        row = self._write_title(ws, 1, f"{account.code} {account.name}")
        row += 1
        row = self._write_header_row(
            ws, row, ["Date", "Voucher No", "Type", "Narration", "Debit", "Credit", "Balance"]
        )
        row = self._write_data_row(
            ws, row, ["", "", "", "Opening Balance", "", "", report.opening_balance]
        )
        for entry in report.entries:
            row = self._write_data_row(
                ws,
                row,
                [
                    entry.date,
                    entry.voucher_no,
                    entry.voucher_type,
                    entry.narration,
                    entry.debit,
                    entry.credit,
                    entry.balance,
                ],
            )
        self._write_data_row(
            ws,
            row,
            [
                "",
                "",
                "",
                "Closing Balance",
                report.total_debit,
                report.total_credit,
                report.closing_balance,
            ],
            is_total=True,
        )
        return ws

    def write_trial_balance(self, report: TrialBalance, sheet_name: str = None):
        ws = self.wb.create_sheet(title=self._sheet_title(sheet_name or "Trial Balance"))
        self._set_column_widths(ws, [12, 36, 15, 15])

        row = self._write_title(ws, 1, "Trial Balance")
        row += 1
        row = self._write_header_row(ws, row, ["Code", "Account", "Debit", "Credit"])
        for line in report.rows:
            row = self._write_data_row(
                ws, row, [line.account_code, line.account_name, line.debit, line.credit]
            )
        row = self._write_data_row(
            ws, row, ["", "Total", report.total_debit, report.total_credit], is_total=True
        )
        if not report.is_balanced:
            difference = report.total_debit - report.total_credit
            ws.cell(row=row + 1, column=1, value=f"Difference {difference:.2f}")
        return ws

    def save(self, filepath: Union[str, Path]) -> Dict[str, Any]:
        path = Path(filepath)
        if not self.wb.sheetnames:
            self.wb.create_sheet(title="Voucher")
        self.wb.save(path)
        logger.info("workbook saved to %s", path)
        return {"file": str(path), "sheets": list(self.wb.sheetnames)}
