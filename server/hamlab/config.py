"""Конфигурация приложения через pydantic settings."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Рабочие параметры лаборатории."""

    data_dir: Path = Path(__file__).resolve().parent.parent / "data"
    encoded_filename: str = "encoded.txt"
    decoded_filename: str = "decoded.txt"
    flip_probability: float = 0.1
    double_flip: float = 0.0
    seed: Optional[int] = None
    metrics_window_seconds: int = 60
    sse_queue_size: int = 100
    log_level: str = "INFO"

    class Config:
        env_prefix = "HAMLAB_"


settings = Settings()
settings.data_dir.mkdir(parents=True, exist_ok=True)
