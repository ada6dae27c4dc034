"""Иерархия исключений лаборатории.

Все ошибки ядра наследуют HammingError; ошибки входных данных
дополнительно являются ValueError, чтобы HTTP-слой отдавал их как 400.
"""


class HammingError(Exception):
    """Базовое исключение кодека Хэмминга(8,4)."""


class MalformedStreamError(HammingError, ValueError):
    """Закодированный поток нельзя разбить на пары кодовых слов."""

    def __init__(self, message: str, length: int | None = None):
        super().__init__(message)
        self.length = length


class ChannelConfigurationError(HammingError, ValueError):
    """Недопустимые параметры канала."""
