"""Помехоустойчивое кодирование Хэмминга(8,4) SECDED."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple

from ..errors import MalformedStreamError
from .codewords import (
    CODEWORD_BITS,
    encode_nibble,
    join_bits,
    split_bits,
    split_byte,
    syndrome,
)

if TYPE_CHECKING:
    from ..noise import ChannelCorruptor

logger = logging.getLogger(__name__)


class OutcomeKind(str, enum.Enum):
    """Результат проверки одного кодового слова."""

    CLEAN = "clean"
    CORRECTED = "corrected"
    UNCORRECTABLE = "uncorrectable"


@dataclass(frozen=True, slots=True)
class CorrectionOutcome:
    kind: OutcomeKind
    position: Optional[int] = None

    @classmethod
    def clean(cls) -> "CorrectionOutcome":
        return cls(OutcomeKind.CLEAN)

    @classmethod
    def corrected_at(cls, position: int) -> "CorrectionOutcome":
        return cls(OutcomeKind.CORRECTED, position)

    @classmethod
    def uncorrectable(cls) -> "CorrectionOutcome":
        return cls(OutcomeKind.UNCORRECTABLE)


@dataclass(frozen=True, slots=True)
class CorrectionEvent:
    """Событие для канала отчётности: исправление или двойная ошибка."""

    codeword_index: int
    byte_index: int
    kind: OutcomeKind
    position: Optional[int] = None

    def as_dict(self) -> Dict[str, int | str | None]:
        return {
            "codeword_index": self.codeword_index,
            "byte_index": self.byte_index,
            "kind": self.kind.value,
            "position": self.position,
        }


EventObserver = Callable[[CorrectionEvent], None]


@dataclass(slots=True)
class DecodeResult:
    data: bytes
    events: List[CorrectionEvent] = field(default_factory=list)
    codewords: int = 0

    @property
    def corrected(self) -> int:
        return sum(1 for ev in self.events if ev.kind is OutcomeKind.CORRECTED)

    @property
    def uncorrectable(self) -> int:
        return sum(1 for ev in self.events if ev.kind is OutcomeKind.UNCORRECTABLE)


def decode_correct(codeword: int) -> Tuple[int, CorrectionOutcome]:
    """Проверить слово по синдрому и исправить одиночную ошибку.

    Возвращает информационный полуоктет и исход проверки. При двойной
    ошибке ни один бит не меняется, полуоктет берётся как есть.
    """

    if not 0 <= codeword <= 0xFF:
        raise ValueError(f"Кодовое слово вне диапазона 0..255: {codeword}")

    bits = split_bits(codeword)
    s1, s2, s3, s4 = syndrome(bits)

    if s4:
        # Нечётное число ошибок: считаем её одиночной.
        position = 4 * s1 + 2 * s2 + s3 or CODEWORD_BITS
        bits[position] ^= 1
        outcome = CorrectionOutcome.corrected_at(position)
    elif s1 or s2 or s3:
        outcome = CorrectionOutcome.uncorrectable()
    else:
        outcome = CorrectionOutcome.clean()

    corrected = join_bits(bits)
    return corrected >> 4, outcome


def reassemble(high: int, low: int) -> int:
    if not (0 <= high <= 0x0F and 0 <= low <= 0x0F):
        raise ValueError(f"Полуоктеты вне диапазона 0..15: {high}, {low}")
    return (high << 4) | low


class HammingCodec:
    """Хэмминг(8,4) поверх полуоктетов: два кодовых слова на байт."""

    def encode(self, payload: bytes) -> bytes:
        encoded: List[int] = []
        for byte in payload:
            high, low = split_byte(byte)
            encoded.append(encode_nibble(high))
            encoded.append(encode_nibble(low))
        return bytes(encoded)

    def decode(
        self,
        payload: bytes,
        corruptor: Optional["ChannelCorruptor"] = None,
        observer: Optional[EventObserver] = None,
    ) -> DecodeResult:
        """Пропустить поток через канал и декодер, собирая события."""

        if len(payload) % 2:
            raise MalformedStreamError(
                f"Длина закодированного потока должна быть чётной, получено {len(payload)}.",
                length=len(payload),
            )

        result = DecodeResult(data=b"", codewords=len(payload))
        decoded = bytearray()

        for i in range(0, len(payload), 2):
            nibbles = []
            for index in (i, i + 1):
                codeword = payload[index]
                if corruptor is not None:
                    codeword = corruptor.apply(codeword)
                nibble, outcome = decode_correct(codeword)
                nibbles.append(nibble)
                if outcome.kind is not OutcomeKind.CLEAN:
                    event = CorrectionEvent(
                        codeword_index=index,
                        byte_index=i // 2,
                        kind=outcome.kind,
                        position=outcome.position,
                    )
                    result.events.append(event)
                    if observer is not None:
                        observer(event)
            decoded.append(reassemble(nibbles[0], nibbles[1]))

        result.data = bytes(decoded)
        logger.debug(
            "Декодировано %d слов: исправлено %d, неисправимо %d",
            result.codewords,
            result.corrected,
            result.uncorrectable,
        )
        return result
