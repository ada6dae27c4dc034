from itertools import combinations

import pytest

from hamlab.errors import MalformedStreamError
from hamlab.pipelines.codewords import CODEWORDS, position_mask
from hamlab.pipelines.fec import (
    CorrectionEvent,
    CorrectionOutcome,
    HammingCodec,
    OutcomeKind,
    decode_correct,
    reassemble,
)


def test_clean_roundtrip_all_bytes():
    codec = HammingCodec()
    original = bytes(range(256))
    encoded = codec.encode(original)
    assert len(encoded) == 2 * len(original)

    result = codec.decode(encoded)
    assert result.data == original
    assert result.events == []


def test_encode_emits_high_nibble_first():
    encoded = HammingCodec().encode(b"\x5A")
    assert list(encoded) == [CODEWORDS[0x5], CODEWORDS[0xA]]


def test_every_single_bit_flip_is_corrected():
    for nibble, codeword in enumerate(CODEWORDS):
        for position in range(1, 9):
            decoded, outcome = decode_correct(codeword ^ position_mask(position))
            assert decoded == nibble
            assert outcome == CorrectionOutcome.corrected_at(position)


def test_every_double_bit_flip_is_detected():
    for codeword in CODEWORDS:
        for k, m in combinations(range(1, 9), 2):
            damaged = codeword ^ position_mask(k) ^ position_mask(m)
            _, outcome = decode_correct(damaged)
            assert outcome.kind is OutcomeKind.UNCORRECTABLE


def test_zero_byte_scenario():
    codec = HammingCodec()
    encoded = codec.encode(b"\x00")
    assert encoded == b"\x00\x00"

    result = codec.decode(encoded)
    assert result.data == b"\x00"
    assert result.corrected == 0
    assert result.events == []


def test_ff_byte_with_bit_three_flipped():
    codec = HammingCodec()
    encoded = bytearray(codec.encode(b"\xFF"))
    assert list(encoded) == [255, 255]

    encoded[0] ^= position_mask(3)
    seen = []
    result = codec.decode(bytes(encoded), observer=seen.append)

    assert result.data == b"\xFF"
    assert result.events == [
        CorrectionEvent(codeword_index=0, byte_index=0, kind=OutcomeKind.CORRECTED, position=3)
    ]
    assert seen == result.events


def test_nibble_five_with_two_bits_flipped():
    assert CODEWORDS[5] == 85
    damaged = 85 ^ position_mask(2) ^ position_mask(6)
    _, outcome = decode_correct(damaged)
    assert outcome == CorrectionOutcome.uncorrectable()


def test_uncorrectable_does_not_stop_decoding():
    codec = HammingCodec()
    encoded = bytearray(codec.encode(b"\x12\x34"))
    encoded[1] ^= 0b00000101
    result = codec.decode(bytes(encoded))

    assert len(result.data) == 2
    assert result.data[1] == 0x34
    assert result.uncorrectable == 1
    assert result.events[0].codeword_index == 1
    assert result.corrected == 0


def test_odd_length_stream_is_rejected():
    seen = []
    with pytest.raises(MalformedStreamError) as excinfo:
        HammingCodec().decode(b"\x00\x1e\x2d", observer=seen.append)
    assert excinfo.value.length == 3
    assert seen == []


def test_malformed_stream_is_value_error():
    with pytest.raises(ValueError):
        HammingCodec().decode(b"\x00")


def test_reassemble():
    assert reassemble(0xA, 0x5) == 0xA5
    with pytest.raises(ValueError):
        reassemble(16, 0)


def test_decode_correct_rejects_wide_values():
    with pytest.raises(ValueError):
        decode_correct(256)
