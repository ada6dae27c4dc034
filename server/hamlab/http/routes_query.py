"""Маршруты мониторинга и выдачи артефактов."""

from __future__ import annotations

from dataclasses import asdict
from typing import AsyncGenerator

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import FileResponse, JSONResponse, StreamingResponse

router = APIRouter()


def _get_metrics(request: Request):
    return request.app.state.metrics


def _get_sse(request: Request):
    return request.app.state.sse


@router.get("/metrics")
async def metrics_snapshot(request: Request):
    """Снимок текущих метрик."""

    return JSONResponse(_get_metrics(request).snapshot())


@router.get("/config/channel")
async def get_channel_config(request: Request):
    """Текущие параметры эмуляции канала."""

    return JSONResponse(asdict(request.app.state.channel))


@router.get("/artifacts/{name}")
async def download_artifact(name: str, request: Request):
    """Выдать закодированный или декодированный поток."""

    path = request.app.state.storage.artifact_path(name)
    if not path:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Артефакт не найден.")
    return FileResponse(path, media_type="application/octet-stream")


@router.get("/events")
async def sse_events(request: Request):
    """SSE-поток событий декодера."""

    async def event_stream() -> AsyncGenerator[str, None]:
        async for msg in _get_sse(request).subscribe():
            yield msg

    return StreamingResponse(event_stream(), media_type="text/event-stream")
