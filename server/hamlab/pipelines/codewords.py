"""Таблица кодовых слов Хэмминга(8,4) и битовые утилиты."""

from __future__ import annotations

from typing import List, Tuple

# Индекс: информационный полуоктет, значение: кодовое слово.
# Информационные биты занимают позиции 1..4 (старший полуоктет).
CODEWORDS: Tuple[int, ...] = (
    0, 30, 45, 51, 75, 85, 102, 120,
    135, 153, 170, 180, 204, 210, 225, 255,
)

CODEWORD_BITS = 8

HIGH_NIBBLE_MASK = 0xF0
LOW_NIBBLE_MASK = 0x0F


def _parity(*bits: int) -> int:
    acc = 0
    for bit in bits:
        acc ^= bit & 1
    return acc


def position_mask(position: int) -> int:
    """Маска одного бита; позиция 1 соответствует старшему биту, 8 младшему."""

    if not 1 <= position <= CODEWORD_BITS:
        raise ValueError(f"Позиция бита вне диапазона 1..8: {position}")
    return 1 << (CODEWORD_BITS - position)


def split_bits(codeword: int) -> List[int]:
    """Разложить кодовое слово в список битов; индекс 0 не используется."""

    return [0] + [(codeword >> (CODEWORD_BITS - pos)) & 1 for pos in range(1, CODEWORD_BITS + 1)]


def join_bits(bits: List[int]) -> int:
    value = 0
    for pos in range(1, CODEWORD_BITS + 1):
        value = (value << 1) | (bits[pos] & 1)
    return value


def syndrome(bits: List[int]) -> Tuple[int, int, int, int]:
    """Синдром (s1, s2, s3, s4) для битов в нумерации 1..8."""

    s1 = _parity(bits[4], bits[5], bits[6], bits[7])
    s2 = _parity(bits[2], bits[3], bits[6], bits[7])
    s3 = _parity(bits[1], bits[3], bits[5], bits[7])
    s4 = _parity(*bits[1:9])
    return s1, s2, s3, s4


def hamming_distance(a: int, b: int) -> int:
    return bin((a ^ b) & 0xFF).count("1")


def encode_nibble(nibble: int) -> int:
    if not 0 <= nibble <= 0x0F:
        raise ValueError(f"Полуоктет вне диапазона 0..15: {nibble}")
    return CODEWORDS[nibble]


def split_byte(byte: int) -> Tuple[int, int]:
    return (byte & HIGH_NIBBLE_MASK) >> 4, byte & LOW_NIBBLE_MASK
