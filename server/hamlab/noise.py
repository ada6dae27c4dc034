"""Эмуляция помех канала для кодовых слов."""

from __future__ import annotations

import random
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

from .errors import ChannelConfigurationError
from .pipelines.codewords import CODEWORD_BITS, position_mask

DEFAULT_FLIP_PROBABILITY = 0.1


@dataclass(slots=True)
class NoiseConfig:
    """Вероятность искажения кодового слова и доля двойных инверсий."""

    flip_probability: float = DEFAULT_FLIP_PROBABILITY
    double_flip: float = 0.0

    def clamp(self) -> "NoiseConfig":
        return NoiseConfig(
            flip_probability=_clamp(self.flip_probability),
            double_flip=_clamp(self.double_flip),
        )


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(value, high))


def _check_probability(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ChannelConfigurationError(f"Параметр {name} должен лежать в [0, 1], получено {value}.")


def choose_flip_positions(
    rng: random.Random,
    probability: float = DEFAULT_FLIP_PROBABILITY,
    double_flip: float = 0.0,
) -> List[int]:
    """Разыграть позиции (1..8), которые канал инвертирует в одном слове."""

    _check_probability("flip_probability", probability)
    _check_probability("double_flip", double_flip)

    if rng.random() >= probability:
        return []
    if double_flip and rng.random() < double_flip:
        return sorted(rng.sample(range(1, CODEWORD_BITS + 1), 2))
    return [rng.randrange(1, CODEWORD_BITS + 1)]


def flip_positions(codeword: int, positions: List[int]) -> int:
    for pos in positions:
        codeword ^= position_mask(pos)
    return codeword


def corrupt(
    codeword: int,
    rng: random.Random,
    probability: float = DEFAULT_FLIP_PROBABILITY,
) -> int:
    """С вероятностью ``probability`` инвертировать ровно один бит слова."""

    return flip_positions(codeword, choose_flip_positions(rng, probability))


@dataclass(slots=True)
class ChannelStats:
    codewords: int = 0
    corrupted: int = 0
    bit_flips: int = 0
    double_flips: int = 0

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


class ChannelCorruptor:
    """Вносит искажения в кодовые слова по одному, ведя статистику.

    Генератор случайных чисел передаётся явно, поэтому прогон с одинаковым
    зерном полностью воспроизводим.
    """

    def __init__(self, config: Optional[NoiseConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or NoiseConfig()
        _check_probability("flip_probability", self.config.flip_probability)
        _check_probability("double_flip", self.config.double_flip)
        self.random = rng if rng is not None else random.Random()
        self.stats = ChannelStats()
        self.last_positions: List[int] = []

    @classmethod
    def seeded(cls, seed: Optional[int], config: Optional[NoiseConfig] = None) -> "ChannelCorruptor":
        return cls(config, random.Random(seed))

    def apply(self, codeword: int) -> int:
        positions = choose_flip_positions(
            self.random,
            self.config.flip_probability,
            self.config.double_flip,
        )
        self.last_positions = positions
        self.stats.codewords += 1
        if positions:
            self.stats.corrupted += 1
            self.stats.bit_flips += len(positions)
            if len(positions) > 1:
                self.stats.double_flips += 1
        return flip_positions(codeword, positions)
