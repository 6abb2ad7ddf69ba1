from .excel_writer import VoucherExcelWriter

__all__ = ["VoucherExcelWriter"]
