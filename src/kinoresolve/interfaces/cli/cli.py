from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any, TextIO

import structlog

from kinoresolve.domain.entities.media import MediaRequest
from kinoresolve.domain.entities.stream import StreamVariant
from kinoresolve.domain.exceptions import (
    PlayerError,
    PlaylistError,
    ResolutionError,
    ResolutionErrorKind,
)
from kinoresolve.infrastructure.composition import build_container
from kinoresolve.infrastructure.config import load_config
from kinoresolve.infrastructure.logging.setup import configure_logging

log = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_UNDECODABLE = 2
EXIT_PLAYER = 3


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="kinoresolve",
        description="Resolve an HLS stream for an IMDb ID and list its variants.",
    )

    parser.add_argument("identifier", help="IMDb ID, e.g. tt5950044.")
    parser.add_argument("--season", type=int, default=None, help="Season (series only).")
    parser.add_argument("--episode", type=int, default=None, help="Episode (series only).")
    parser.add_argument(
        "--variant",
        type=int,
        default=None,
        help="Index of the variant to play (default: first).",
    )
    parser.add_argument(
        "--play",
        action="store_true",
        help="Open the selected variant in the configured player.",
    )

    # Config wiring flags (no business logic)
    parser.add_argument("--config", default=None, help="Path to YAML config file.")
    parser.add_argument("--dotenv", default=None, help="Path to .env file.")
    parser.add_argument(
        "--diagnostics-dir",
        default=None,
        help="Override the diagnostics output directory.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override log level.",
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "console"],
        help="Override log format.",
    )

    return parser.parse_args(argv)


def build_request(args: argparse.Namespace) -> MediaRequest:
    if args.season is None and args.episode is None:
        return MediaRequest.movie(args.identifier)
    return MediaRequest.series(args.identifier, args.season or 0, args.episode or 0)


def print_variants(variants: list[StreamVariant], out: TextIO) -> None:
    for index, variant in enumerate(variants):
        print(f"[{index}] {variant.display} - {variant.url}", file=out)


def start(argv: Iterable[str] | None = None, *, out: TextIO | None = None) -> int:
    """
    Process entrypoint.

    Loads config exactly once, then builds the object graph with it.
    """
    if argv is None:
        argv = sys.argv[1:]
    out = out or sys.stdout

    args = _parse_args(argv)

    config_path = Path(args.config) if args.config else None
    dotenv_path = Path(args.dotenv) if args.dotenv else None

    cli_overrides: dict[str, Any] = {}
    if args.diagnostics_dir:
        cli_overrides["diagnostics_dir"] = args.diagnostics_dir
    if args.log_level:
        cli_overrides["log_level"] = args.log_level
    if args.log_format:
        cli_overrides["log_format"] = args.log_format

    config = load_config(
        config_path=config_path,
        dotenv_path=dotenv_path,
        cli_overrides=cli_overrides,
    )
    configure_logging(config)

    request = build_request(args)
    container = build_container(config)
    try:
        try:
            variants = container.use_case.execute(request)
        except ResolutionError as exc:
            log.error("resolution_failed", kind=exc.kind.value, error=str(exc))
            if exc.kind is ResolutionErrorKind.UNDECODABLE:
                return EXIT_UNDECODABLE
            return EXIT_FAILED
        except PlaylistError as exc:
            log.error("playlist_failed", url=exc.master_url[:120], error=str(exc))
            return EXIT_FAILED

        print_variants(variants, out)

        if not args.play:
            return EXIT_OK

        index = args.variant or 0
        if not 0 <= index < len(variants):
            log.error("variant_out_of_range", index=index, count=len(variants))
            return EXIT_FAILED

        try:
            container.player.play(variants[index].url)
        except PlayerError as exc:
            log.error("player_failed", error=str(exc))
            return EXIT_PLAYER
        return EXIT_OK
    finally:
        container.close()


if __name__ == "__main__":
    raise SystemExit(start())
