"""Рассылка событий декодера по Server-Sent Events."""

from __future__ import annotations

import asyncio
from typing import AsyncGenerator, Dict, Set

import orjson


class SSEManager:
    """Брокер SSE: каждое событие уходит всем подписчикам.

    Подписчик, чья очередь переполнилась, отключается, чтобы медленный
    клиент не задерживал декодирование.
    """

    def __init__(self, queue_size: int = 100) -> None:
        self._subscribers: Set[asyncio.Queue[str]] = set()
        self._lock = asyncio.Lock()
        self.queue_size = queue_size

    async def subscribe(self) -> AsyncGenerator[str, None]:
        queue: asyncio.Queue[str] = asyncio.Queue(self.queue_size)
        async with self._lock:
            self._subscribers.add(queue)
        try:
            while True:
                yield await queue.get()
        finally:
            async with self._lock:
                self._subscribers.discard(queue)

    async def publish(self, event: str, data: Dict) -> None:
        if not self._subscribers:
            return
        payload = format_event(event, data)
        async with self._lock:
            overflowed = set()
            for queue in self._subscribers:
                try:
                    queue.put_nowait(payload)
                except asyncio.QueueFull:
                    overflowed.add(queue)
            self._subscribers -= overflowed


def format_event(event: str, data: Dict) -> str:
    body = orjson.dumps(data).decode("utf-8")
    return f"event: {event}\ndata: {body}\n\n"
