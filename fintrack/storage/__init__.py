"""Mini README: File storage for uploaded receipts.

Exports the local-directory ``ReceiptStore`` used by the upload and file
viewer routes, plus the small helpers that label file sizes and kinds.
"""

from .receipts import ReceiptStore, StoredFile, describe_size, file_kind

__all__ = ["ReceiptStore", "StoredFile", "describe_size", "file_kind"]
