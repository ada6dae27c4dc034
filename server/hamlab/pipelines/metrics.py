"""Сбор и агрегация метрик в скользящем окне."""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict


@dataclass(slots=True)
class EncodeSample:
    timestamp: float
    num_bytes: int
    duration: float


@dataclass(slots=True)
class DecodeSample:
    timestamp: float
    codewords: int
    corrected: int
    uncorrectable: int
    bit_flips: int
    duration: float


class MetricAggregator:
    """Собирает статистику прогонов и агрегирует её в пределах окна."""

    def __init__(self, window_seconds: int = 60) -> None:
        self.window_seconds = window_seconds
        self._encodes: Deque[EncodeSample] = deque()
        self._decodes: Deque[DecodeSample] = deque()

    # ---------- Recording helpers ----------
    def record_encode(self, num_bytes: int, duration: float) -> None:
        self._encodes.append(EncodeSample(time.time(), num_bytes, duration))
        self._trim()

    def record_decode(
        self,
        codewords: int,
        corrected: int,
        uncorrectable: int,
        bit_flips: int = 0,
        duration: float = 0.0,
    ) -> None:
        self._decodes.append(
            DecodeSample(time.time(), codewords, corrected, uncorrectable, bit_flips, duration)
        )
        self._trim()

    # ---------- Aggregates ----------
    def _trim(self) -> None:
        cutoff = time.time() - self.window_seconds
        for deque_ in (self._encodes, self._decodes):
            while deque_ and deque_[0].timestamp < cutoff:
                deque_.popleft()

    def throughput_kbps(self) -> float:
        if not self._encodes:
            return 0.0
        total_bytes = sum(sample.num_bytes for sample in self._encodes)
        total_time = sum(sample.duration for sample in self._encodes) or 1e-6
        return (total_bytes * 8 / 1000) / total_time

    def totals(self) -> Dict[str, int]:
        return {
            "codewords": sum(s.codewords for s in self._decodes),
            "corrected": sum(s.corrected for s in self._decodes),
            "uncorrectable": sum(s.uncorrectable for s in self._decodes),
            "bit_flips": sum(s.bit_flips for s in self._decodes),
        }

    def residual_ratio(self) -> float:
        """Доля кодовых слов, которые не удалось исправить."""

        totals = self.totals()
        if not totals["codewords"]:
            return 0.0
        return totals["uncorrectable"] / totals["codewords"]

    def snapshot(self) -> Dict[str, object]:
        self._trim()
        return {
            "window_seconds": self.window_seconds,
            "throughput_kbps": round(self.throughput_kbps(), 3),
            "totals": self.totals(),
            "residual_ratio": round(self.residual_ratio(), 6),
            "samples": {
                "encode": len(self._encodes),
                "decode": len(self._decodes),
            },
        }
