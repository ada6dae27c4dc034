"""Вспомогательные экспорты модулей конвейера."""

from .codewords import CODEWORDS, encode_nibble, hamming_distance, syndrome  # noqa: F401
from .fec import (
    CorrectionEvent,
    CorrectionOutcome,
    DecodeResult,
    HammingCodec,
    OutcomeKind,
    decode_correct,
    reassemble,
)  # noqa: F401
from .metrics import MetricAggregator  # noqa: F401
from .transmission import TransmissionReport, run_file_pipeline, transmit_bytes  # noqa: F401
