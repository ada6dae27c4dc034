"""Точка входа FastAPI-приложения."""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from .config import Settings, settings as default_settings
from .http import routes_codec, routes_query
from .http.sse import SSEManager
from .noise import NoiseConfig
from .pipelines.metrics import MetricAggregator
from .storage import ArtifactStorage


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    app = FastAPI(
        title="Лаборатория кода Хэмминга(8,4)",
        description="Конвейер: кодирование → канал с помехами → исправление ошибок.",
        version="0.1.0",
        default_response_class=ORJSONResponse,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.metrics = MetricAggregator(settings.metrics_window_seconds)
    app.state.channel = NoiseConfig(
        flip_probability=settings.flip_probability,
        double_flip=settings.double_flip,
    ).clamp()
    app.state.sse = SSEManager(settings.sse_queue_size)
    app.state.storage = ArtifactStorage.from_settings(settings)

    app.include_router(routes_codec.router, prefix="/api")
    app.include_router(routes_query.router, prefix="/api")

    @app.get("/")
    async def root():
        return {"сообщение": "Лаборатория Хэмминга(8,4). Документация API: /docs."}

    return app


app = create_app()
