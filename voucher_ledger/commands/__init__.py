from .compute import add_parser as add_compute_parser
from .validate import add_parser as add_validate_parser
from .post import add_parser as add_post_parser
from .ledger import add_parser as add_ledger_parser
from .export import add_parser as add_export_parser

__all__ = [
    "add_compute_parser",
    "add_validate_parser",
    "add_post_parser",
    "add_ledger_parser",
    "add_export_parser",
]
