"""Полный прогон: файл → кодирование → канал → декодирование → файл."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional

from .fec import CorrectionEvent, EventObserver, HammingCodec, OutcomeKind

if TYPE_CHECKING:
    from ..noise import ChannelCorruptor
    from ..storage import ArtifactStorage

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TransmissionReport:
    input_bytes: int
    encoded_bytes: int
    decoded: bytes
    encoded_path: Path
    decoded_path: Path
    events: List[CorrectionEvent] = field(default_factory=list)
    channel: Dict[str, int] = field(default_factory=dict)
    encode_seconds: float = 0.0
    decode_seconds: float = 0.0

    @property
    def corrected(self) -> int:
        return sum(1 for ev in self.events if ev.kind is OutcomeKind.CORRECTED)

    @property
    def uncorrectable(self) -> int:
        return sum(1 for ev in self.events if ev.kind is OutcomeKind.UNCORRECTABLE)

    def summary(self) -> Dict[str, object]:
        return {
            "input_bytes": self.input_bytes,
            "encoded_bytes": self.encoded_bytes,
            "decoded_bytes": len(self.decoded),
            "corrected": self.corrected,
            "uncorrectable": self.uncorrectable,
            "channel": dict(self.channel),
            "encoded_path": str(self.encoded_path),
            "decoded_path": str(self.decoded_path),
        }


def transmit_bytes(
    data: bytes,
    storage: "ArtifactStorage",
    corruptor: Optional["ChannelCorruptor"] = None,
    observer: Optional[EventObserver] = None,
) -> TransmissionReport:
    """Закодировать, сохранить промежуточный поток, перечитать и декодировать."""

    codec = HammingCodec()

    start = time.perf_counter()
    encoded = codec.encode(data)
    encoded_path = storage.write_encoded(encoded)
    encode_seconds = time.perf_counter() - start
    logger.info("Закодировано %d байт в %s", len(data), encoded_path)

    start = time.perf_counter()
    result = codec.decode(storage.read_encoded(), corruptor, observer)
    decoded_path = storage.write_decoded(result.data)
    decode_seconds = time.perf_counter() - start
    logger.info("Декодировано %d байт в %s", len(result.data), decoded_path)

    return TransmissionReport(
        input_bytes=len(data),
        encoded_bytes=len(encoded),
        decoded=result.data,
        encoded_path=encoded_path,
        decoded_path=decoded_path,
        events=result.events,
        channel=corruptor.stats.as_dict() if corruptor is not None else {},
        encode_seconds=encode_seconds,
        decode_seconds=decode_seconds,
    )


def run_file_pipeline(
    path: Path | str,
    storage: "ArtifactStorage",
    corruptor: Optional["ChannelCorruptor"] = None,
    observer: Optional[EventObserver] = None,
) -> TransmissionReport:
    return transmit_bytes(storage.read_input(path), storage, corruptor, observer)
