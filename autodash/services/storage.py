from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List


class StorageBackend(ABC):
    """
    Abstract interface for small key/value file storage (local disk, object stores, ...).
    """

    @abstractmethod
    def write_bytes(self, path: str, data: bytes) -> None:
        pass

    @abstractmethod
    def read_bytes(self, path: str) -> bytes:
        pass

    @abstractmethod
    def exists(self, path: str) -> bool:
        pass

    @abstractmethod
    def delete(self, path: str) -> None:
        """Remove a stored file; a missing file is not an error."""
        pass

    @abstractmethod
    def list_files(self, prefix: str, suffix: str = "") -> List[str]:
        """List file paths starting with prefix and ending with suffix."""
        pass

    # JSON helpers shared by every backend
    def write_json(self, path: str, data: Dict[str, Any]) -> None:
        self.write_bytes(path, json.dumps(data, indent=2).encode("utf-8"))

    def read_json(self, path: str) -> Dict[str, Any]:
        return json.loads(self.read_bytes(path))


class LocalFileSystemStorage(StorageBackend):
    """
    Local filesystem implementation rooted at a single directory.
    """

    def __init__(self, root: Path):
        self.root = Path(root).resolve()
        self.root.mkdir(parents=True, exist_ok=True)

    def _resolve(self, path: str) -> Path:
        # Prevent path traversal attacks
        full_path = (self.root / path).resolve()
        if full_path != self.root and self.root not in full_path.parents:
            raise ValueError(f"Access denied: {path}")
        return full_path

    def write_bytes(self, path: str, data: bytes) -> None:
        p = self._resolve(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(data)

    def read_bytes(self, path: str) -> bytes:
        return self._resolve(path).read_bytes()

    def exists(self, path: str) -> bool:
        return self._resolve(path).exists()

    def delete(self, path: str) -> None:
        self._resolve(path).unlink(missing_ok=True)

    def list_files(self, prefix: str, suffix: str = "") -> List[str]:
        # Prefix is treated as a directory in local fs terms
        p = self._resolve(prefix)
        if not p.exists():
            return []

        return sorted(
            str(f.relative_to(self.root))
            for f in p.glob(f"*{suffix}")
            if f.is_file()
        )


class InMemoryStorage(StorageBackend):
    """
    Dict-backed storage, used when no storage directory is configured and in tests.
    """

    def __init__(self) -> None:
        self._files: Dict[str, bytes] = {}

    def write_bytes(self, path: str, data: bytes) -> None:
        self._files[path] = bytes(data)

    def read_bytes(self, path: str) -> bytes:
        try:
            return self._files[path]
        except KeyError:
            raise FileNotFoundError(path)

    def exists(self, path: str) -> bool:
        return path in self._files

    def delete(self, path: str) -> None:
        self._files.pop(path, None)

    def list_files(self, prefix: str, suffix: str = "") -> List[str]:
        prefix = prefix.rstrip("/") + "/" if prefix else ""
        return sorted(p for p in self._files if p.startswith(prefix) and p.endswith(suffix))
