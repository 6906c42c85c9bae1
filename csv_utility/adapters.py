"""
Port implementations that need no editor host.

LocalFileStore backs file dialogs' paths with a directory on disk,
MemoryAssetStore keeps assets in a dict keyed by path, and ScriptedDialogs
answers dialogs from queued responses.
"""

from __future__ import annotations

import posixpath
from collections import deque
from pathlib import Path
from typing import Any, Deque, Dict, Iterable, List, Optional, Tuple

from .rules import TARGET_ENCODING


class LocalFileStore:
    def __init__(self, base_path: str | Path):
        self.base_path = Path(base_path).resolve()
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _safe_path(self, path: str) -> Path:
        # Prevent traversal
        target = (self.base_path / path).resolve()
        if target != self.base_path and self.base_path not in target.parents:
            raise ValueError(f"Path traversal attempt detected: {path}")
        return target

    def read_bytes(self, path: str) -> bytes:
        target = self._safe_path(path)
        if not target.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        return target.read_bytes()

    def write_text(self, path: str, text: str) -> None:
        target = self._safe_path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        # newline="" keeps "\n" terminators and line breaks inside quoted fields as-is
        with open(target, "w", encoding=TARGET_ENCODING, newline="") as f:
            f.write(text)


class MemoryAssetStore:
    """Asset index and asset store over a path -> (type name, object) dict."""

    def __init__(self) -> None:
        self._assets: Dict[str, Tuple[str, Any]] = {}
        self.save_count = 0

    def __len__(self) -> int:
        return len(self._assets)

    def paths(self) -> List[str]:
        return sorted(self._assets)

    def find(self, type_name: str, folder: str) -> List[str]:
        prefix = folder.rstrip("/") + "/"
        return sorted(
            path
            for path, (stored_type, _) in self._assets.items()
            if stored_type == type_name and path.startswith(prefix)
        )

    def load(self, path: str, type_name: Optional[str] = None) -> Any:
        entry = self._assets.get(path)
        if entry is None:
            return None
        stored_type, obj = entry
        if type_name is not None and stored_type != type_name:
            return None
        return obj

    def path_of(self, obj: Any) -> str:
        for path, (_, stored) in self._assets.items():
            if stored is obj:
                return path
        return ""

    def unique_path(self, path: str) -> str:
        if path not in self._assets:
            return path
        stem, ext = posixpath.splitext(path)
        n = 1
        while f"{stem} {n}{ext}" in self._assets:
            n += 1
        return f"{stem} {n}{ext}"

    def create(self, obj: Any, path: str, type_name: str) -> None:
        if path in self._assets:
            raise FileExistsError(f"Asset already exists: {path}")
        self._assets[path] = (type_name, obj)

    def save(self) -> None:
        self.save_count += 1


class ScriptedDialogs:
    """Dialog port answered from queues; an empty queue means cancel / no."""

    def __init__(
        self,
        open_paths: Iterable[str] = (),
        save_paths: Iterable[str] = (),
        confirmations: Iterable[bool] = (),
    ):
        self.open_paths: Deque[str] = deque(open_paths)
        self.save_paths: Deque[str] = deque(save_paths)
        self.confirmations: Deque[bool] = deque(confirmations)
        self.alerts: List[Tuple[str, str]] = []

    def open_file(self, title: str, extension: str) -> str:
        return self.open_paths.popleft() if self.open_paths else ""

    def save_file(self, title: str, default_name: str, extension: str) -> str:
        return self.save_paths.popleft() if self.save_paths else ""

    def confirm(self, title: str, message: str, ok: str = "Yes", cancel: str = "No") -> bool:
        return self.confirmations.popleft() if self.confirmations else False

    def alert(self, title: str, message: str) -> None:
        self.alerts.append((title, message))
