"""Маршруты кодирования, декодирования и управления каналом."""

from __future__ import annotations

import base64
import binascii
import time
from typing import Dict, List

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.concurrency import run_in_threadpool

from ..models import (
    ChannelNoiseRequest,
    ChannelSettings,
    DecodeRequest,
    DecodeResponse,
    EncodeRequest,
    EncodeResponse,
    EventModel,
    TransmitRequest,
    TransmitResponse,
)
from ..noise import ChannelCorruptor, NoiseConfig
from ..pipelines import HammingCodec, transmit_bytes
from ..pipelines.fec import CorrectionEvent, OutcomeKind
from ..reporting import LogReporter
from .sse import SSEManager

router = APIRouter()


def _get_sse(request: Request):
    return request.app.state.sse


def _get_metrics(request: Request):
    return request.app.state.metrics


def _get_storage(request: Request):
    return request.app.state.storage


def b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def b64decode(data: str) -> bytes:
    try:
        return base64.b64decode(data.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Некорректная строка Base64.",
        ) from exc


def _build_corruptor(payload: ChannelSettings, request: Request) -> ChannelCorruptor:
    """Генератор создаётся на каждый прогон; зерно из запроса или настроек."""

    base: NoiseConfig = request.app.state.channel
    config = NoiseConfig(
        flip_probability=(
            payload.flip_probability if payload.flip_probability is not None else base.flip_probability
        ),
        double_flip=payload.double_flip if payload.double_flip is not None else base.double_flip,
    )
    seed = payload.seed if payload.seed is not None else request.app.state.settings.seed
    return ChannelCorruptor.seeded(seed, config)


def _event_models(events: List[CorrectionEvent]) -> List[EventModel]:
    return [EventModel(**event.as_dict()) for event in events]


SSE_EVENT_NAMES = {
    OutcomeKind.CORRECTED: "correction",
    OutcomeKind.UNCORRECTABLE: "uncorrectable",
}


async def publish_decode_events(sse: SSEManager, events: List[CorrectionEvent], summary: Dict) -> None:
    for event in events:
        await sse.publish(SSE_EVENT_NAMES[event.kind], event.as_dict())
    await sse.publish("decode", summary)


@router.post("/encode", response_model=EncodeResponse)
async def encode(payload: EncodeRequest, request: Request) -> EncodeResponse:
    """Кодирование байтов в пары кодовых слов."""

    data = b64decode(payload.data)
    start = time.perf_counter()
    encoded = HammingCodec().encode(data)
    _get_metrics(request).record_encode(len(data), time.perf_counter() - start)
    return EncodeResponse(
        encoded=b64encode(encoded),
        input_bytes=len(data),
        output_bytes=len(encoded),
    )


@router.post("/decode", response_model=DecodeResponse)
async def decode(payload: DecodeRequest, request: Request) -> DecodeResponse:
    """Прогон закодированного потока через канал и декодер."""

    encoded = b64decode(payload.encoded)
    corruptor = _build_corruptor(payload, request)
    start = time.perf_counter()
    try:
        result = HammingCodec().decode(encoded, corruptor, LogReporter())
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    duration = time.perf_counter() - start

    _get_metrics(request).record_decode(
        result.codewords,
        result.corrected,
        result.uncorrectable,
        corruptor.stats.bit_flips,
        duration,
    )
    await publish_decode_events(
        _get_sse(request),
        result.events,
        {"codewords": result.codewords, "corrected": result.corrected, "uncorrectable": result.uncorrectable},
    )
    return DecodeResponse(
        decoded=b64encode(result.data),
        codewords=result.codewords,
        corrected=result.corrected,
        uncorrectable=result.uncorrectable,
        channel=corruptor.stats.as_dict(),
        events=_event_models(result.events),
    )


@router.post("/transmit", response_model=TransmitResponse)
async def transmit(payload: TransmitRequest, request: Request) -> TransmitResponse:
    """Полный прогон через файлы артефактов."""

    data = b64decode(payload.data)
    corruptor = _build_corruptor(payload, request)
    report = await run_in_threadpool(
        transmit_bytes, data, _get_storage(request), corruptor, LogReporter()
    )

    metrics = _get_metrics(request)
    metrics.record_encode(report.input_bytes, report.encode_seconds)
    metrics.record_decode(
        report.encoded_bytes,
        report.corrected,
        report.uncorrectable,
        corruptor.stats.bit_flips,
        report.decode_seconds,
    )
    await publish_decode_events(_get_sse(request), report.events, report.summary())
    return TransmitResponse(
        decoded=b64encode(report.decoded),
        codewords=report.encoded_bytes,
        corrected=report.corrected,
        uncorrectable=report.uncorrectable,
        channel=report.channel,
        events=_event_models(report.events),
        encoded_path=str(report.encoded_path),
        decoded_path=str(report.decoded_path),
    )


@router.post("/config/channel")
async def configure_channel(payload: ChannelNoiseRequest, request: Request) -> Dict[str, float]:
    """Настройка параметров помех."""

    config = NoiseConfig(
        flip_probability=payload.flip_probability,
        double_flip=payload.double_flip,
    ).clamp()
    request.app.state.channel = config
    data = {
        "flip_probability": config.flip_probability,
        "double_flip": config.double_flip,
    }
    await _get_sse(request).publish("noise_config", data)
    return data
