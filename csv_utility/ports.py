from typing import Any, List, Optional, Protocol


class DialogPort(Protocol):
    def open_file(self, title: str, extension: str) -> str:
        """Return the chosen path, or "" when cancelled."""
        ...

    def save_file(self, title: str, default_name: str, extension: str) -> str:
        """Return the chosen path, or "" when cancelled."""
        ...

    def confirm(self, title: str, message: str, ok: str = "Yes", cancel: str = "No") -> bool: ...

    def alert(self, title: str, message: str) -> None: ...


class FileStorePort(Protocol):
    def read_bytes(self, path: str) -> bytes:
        """Raises FileNotFoundError / OSError."""
        ...

    def write_text(self, path: str, text: str) -> None: ...


class AssetIndexPort(Protocol):
    def find(self, type_name: str, folder: str) -> List[str]:
        """Return paths of stored assets of type_name under folder."""
        ...


class AssetStorePort(Protocol):
    def load(self, path: str, type_name: Optional[str] = None) -> Any:
        """Return the asset at path, or None if missing or of another type."""
        ...

    def path_of(self, obj: Any) -> str:
        """Return the stored path of obj, or "" if it is not stored."""
        ...

    def unique_path(self, path: str) -> str: ...

    def create(self, obj: Any, path: str, type_name: str) -> None: ...

    def save(self) -> None: ...
