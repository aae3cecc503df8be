"""Mini README: Receipt file store backed by a local directory.

Structure:
    * StoredFile - name, size and creation time of a stored receipt.
    * ReceiptStore - upload/list/download/delete/public URL operations.
    * describe_size / file_kind - presentation helpers for the file viewer.

Uploads are renamed to ``<milliseconds>_<random>.<ext>`` so two receipts
called ``scan.pdf`` never collide, and only document and image extensions
are accepted. Names coming back from the browser are checked so they can
never escape the receipts directory.
"""

from __future__ import annotations

import math
import secrets
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional
from urllib.parse import quote

from ..configuration import get_settings
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "gif", "webp"}
DOCUMENT_EXTENSIONS = {"pdf"}
ALLOWED_EXTENSIONS = IMAGE_EXTENSIONS | DOCUMENT_EXTENSIONS
LIST_LIMIT = 100


@dataclass(slots=True)
class StoredFile:
    """Metadata describing a stored receipt."""

    name: str
    size: int
    created_at: datetime

    def as_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "size": self.size,
            "size_label": describe_size(self.size),
            "kind": file_kind(self.name),
            "created_at": self.created_at.isoformat(),
        }


def _extension(file_name: str) -> str:
    return file_name.rsplit(".", 1)[-1].lower() if "." in file_name else ""


def file_kind(file_name: str) -> str:
    """Classify a file as ``image``, ``pdf`` or ``other`` by extension."""

    extension = _extension(file_name)
    if extension in IMAGE_EXTENSIONS:
        return "image"
    if extension in DOCUMENT_EXTENSIONS:
        return "pdf"
    return "other"


def describe_size(size: Optional[int]) -> str:
    """Human readable size such as ``1.5 KB``."""

    if not size:
        return "Unknown size"
    units = ["Bytes", "KB", "MB", "GB"]
    index = min(int(math.floor(math.log(size, 1024))), len(units) - 1)
    value = round(size / 1024**index, 2)
    return f"{value:g} {units[index]}"


class ReceiptStore:
    """Store receipts, invoices and other financial documents."""

    def __init__(
        self,
        *,
        storage_directory: Optional[Path] = None,
        max_bytes: Optional[int] = None,
        public_base_url: Optional[str] = None,
    ) -> None:
        if storage_directory is None or max_bytes is None or public_base_url is None:
            settings = get_settings()
            storage_directory = storage_directory or settings.receipts_directory
            max_bytes = max_bytes or settings.receipt_max_bytes
            public_base_url = public_base_url or settings.public_base_url
        self.storage_directory = storage_directory
        self.max_bytes = max_bytes
        self.public_base_url = public_base_url.rstrip("/")
        self.storage_directory.mkdir(parents=True, exist_ok=True)
        LOGGER.debug("Receipt storage directory set to %s", self.storage_directory)

    def _resolve(self, name: str) -> Path:
        """Map a stored name to its path, rejecting anything outside the store."""

        candidate = (self.storage_directory / name).resolve()
        if not name or candidate.parent != self.storage_directory.resolve():
            raise ValueError(f"Invalid receipt name: {name!r}")
        return candidate

    def upload(self, original_name: str, data: bytes) -> str:
        """Store ``data`` under a generated unique name and return that name."""

        extension = _extension(original_name)
        if extension not in ALLOWED_EXTENSIONS:
            raise ValueError(
                f"Unsupported file type for {original_name!r};"
                f" allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
            )
        if len(data) > self.max_bytes:
            raise ValueError(
                f"{original_name!r} is {describe_size(len(data))};"
                f" the limit is {describe_size(self.max_bytes)}"
            )
        stored_name = f"{int(time.time() * 1000)}_{secrets.token_hex(6)}.{extension}"
        self._resolve(stored_name).write_bytes(data)
        LOGGER.info("Stored receipt %s as %s (%s bytes)", original_name, stored_name, len(data))
        return stored_name

    def list(self) -> List[StoredFile]:
        """Return stored receipts, newest first."""

        files = []
        for path in self.storage_directory.iterdir():
            if not path.is_file():
                continue
            stat = path.stat()
            files.append(
                StoredFile(
                    name=path.name,
                    size=stat.st_size,
                    created_at=datetime.fromtimestamp(stat.st_mtime),
                )
            )
        files.sort(key=lambda stored: (stored.created_at, stored.name), reverse=True)
        return files[:LIST_LIMIT]

    def download(self, name: str) -> bytes:
        path = self._resolve(name)
        if not path.is_file():
            raise FileNotFoundError(f"Receipt {name} not found")
        return path.read_bytes()

    def delete(self, name: str) -> None:
        path = self._resolve(name)
        if not path.is_file():
            raise FileNotFoundError(f"Receipt {name} not found")
        path.unlink()
        LOGGER.info("Deleted receipt %s", name)

    def get_public_url(self, name: str) -> str:
        """Return the URL the viewer opens for ``name``."""

        self._resolve(name)
        return f"{self.public_base_url}/receipts/{quote(name)}"
