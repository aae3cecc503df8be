"""Mini README: Report exports for the finance tracker.

Exposes the transaction report builder used by the export route.
"""

from .reports import REPORT_COLUMNS, build_transaction_report

__all__ = ["REPORT_COLUMNS", "build_transaction_report"]
