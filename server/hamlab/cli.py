"""Командная строка лаборатории.

Примеры:
    hamlab run data.txt
    hamlab run data.txt --seed 7 --probability 0.25 --data-dir out
    hamlab serve --port 8000
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import settings
from .noise import ChannelCorruptor, NoiseConfig
from .pipelines.transmission import run_file_pipeline
from .reporting import LogReporter
from .storage import ArtifactStorage

logger = logging.getLogger(__name__)


def probability(value: str) -> float:
    """Тип аргумента: вероятность в отрезке [0, 1]."""

    try:
        number = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"не число: {value!r}") from exc
    if not 0.0 <= number <= 1.0:
        raise argparse.ArgumentTypeError(f"вероятность должна лежать в [0, 1], получено {value}")
    return number


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="hamlab",
        description="Кодирование Хэмминга(8,4) через канал с помехами",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help=f"Уровень журнала (по умолчанию: {settings.log_level})",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Закодировать файл, исказить и декодировать")
    run.add_argument("path", type=Path, help="Файл с исходными байтами")
    run.add_argument(
        "--seed",
        type=int,
        default=settings.seed,
        help="Зерно генератора помех (по умолчанию: случайное)",
    )
    run.add_argument(
        "--probability",
        type=probability,
        default=settings.flip_probability,
        help=f"Вероятность искажения кодового слова (по умолчанию: {settings.flip_probability})",
    )
    run.add_argument(
        "--double-flip",
        type=probability,
        default=settings.double_flip,
        help="Доля искажений, инвертирующих два бита (по умолчанию: 0)",
    )
    run.add_argument(
        "--data-dir",
        type=Path,
        default=settings.data_dir,
        help="Каталог для encoded.txt и decoded.txt",
    )

    serve = sub.add_parser("serve", help="Запустить HTTP-сервер")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    return parser.parse_args(argv)


def run_command(args: argparse.Namespace) -> int:
    storage = ArtifactStorage(args.data_dir, settings.encoded_filename, settings.decoded_filename)
    corruptor = ChannelCorruptor.seeded(
        args.seed,
        NoiseConfig(flip_probability=args.probability, double_flip=args.double_flip),
    )
    report = run_file_pipeline(args.path, storage, corruptor, LogReporter())

    logger.info(
        "Готово: %d байт, исправлено %d, неисправимо %d, инверсий в канале %d",
        report.input_bytes,
        report.corrected,
        report.uncorrectable,
        report.channel.get("bit_flips", 0),
    )
    return 0


def serve_command(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("hamlab.main:app", host=args.host, port=args.port)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_arguments(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(levelname)s: %(message)s",
    )
    if args.command == "serve":
        return serve_command(args)
    return run_command(args)


if __name__ == "__main__":
    sys.exit(main())
