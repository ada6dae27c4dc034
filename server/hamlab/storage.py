"""Хранилище артефактов конвейера на диске."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Optional

from .config import Settings


class ArtifactStorage:
    """Закодированный и декодированный потоки лежат под фиксированными именами.

    Ошибки ввода-вывода не перехватываются: решать, повторять ли операцию,
    должен вызывающий код.
    """

    def __init__(
        self,
        root: Path,
        encoded_filename: str = "encoded.txt",
        decoded_filename: str = "decoded.txt",
    ):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        self.encoded_path = self.root / encoded_filename
        self.decoded_path = self.root / decoded_filename
        self._lock = threading.RLock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "ArtifactStorage":
        return cls(settings.data_dir, settings.encoded_filename, settings.decoded_filename)

    @staticmethod
    def read_input(path: Path | str) -> bytes:
        return Path(path).read_bytes()

    def write_encoded(self, data: bytes) -> Path:
        with self._lock:
            self.encoded_path.write_bytes(data)
        return self.encoded_path

    def read_encoded(self) -> bytes:
        return self.encoded_path.read_bytes()

    def write_decoded(self, data: bytes) -> Path:
        with self._lock:
            self.decoded_path.write_bytes(data)
        return self.decoded_path

    def read_decoded(self) -> bytes:
        return self.decoded_path.read_bytes()

    def artifact_path(self, name: str) -> Optional[Path]:
        """Путь к существующему артефакту по имени ``encoded``/``decoded``."""

        path = {"encoded": self.encoded_path, "decoded": self.decoded_path}.get(name)
        if path is None or not path.exists():
            return None
        return path
