"""Filesystem blob store for contract documents."""

from __future__ import annotations

import uuid
from pathlib import Path


class LocalDocumentStorage:
    """Writes blobs under ``root/<company_id>/``; callers keep only the returned key."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def _resolve(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if self.root.resolve() not in path.parents:
            raise ValueError(f"Storage key escapes storage root: {key}")
        return path

    def save(self, company_id: int, file_name: str, data: bytes) -> str:
        suffix = Path(file_name).suffix.lower()
        key = f"{company_id}/{uuid.uuid4().hex}{suffix}"
        path = self._resolve(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return key

    def read(self, key: str) -> bytes:
        return self._resolve(key).read_bytes()

    def delete(self, key: str) -> None:
        self._resolve(key).unlink(missing_ok=True)
