"""watchjs CLI entry point."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from typing import List

from .client import create_client
from .config import ClientConfig, parse_interval_ms
from .document import Document
from .errors import ConfigError

LOG = logging.getLogger("watchjs.cli")

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "silent": logging.CRITICAL + 1,
}


def parse_log_level(name: str) -> int:
    try:
        return LOG_LEVELS[name.lower()]
    except KeyError:
        raise argparse.ArgumentTypeError(f"unknown log level {name!r}") from None


def _configure_logging(level: int) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="watchjs live-reload client")
    parser.add_argument("--url", help="watchjs socket endpoint (ws://, wss://, http:// or https://)")
    parser.add_argument(
        "--reconnect-interval",
        type=int,
        help="Milliseconds between reconnect attempts (default 1000)",
    )
    parser.add_argument(
        "--log-level",
        type=parse_log_level,
        default=os.environ.get("WATCHJS_LOG", "info"),
        help="debug, info, warn, error or silent (default info)",
    )
    return parser


def resolve_config(args: argparse.Namespace) -> ClientConfig:
    config = ClientConfig.from_env()
    if args.url:
        config = ClientConfig(
            socket_url=args.url,
            reconnect_interval=config.reconnect_interval,
            autostart=config.autostart,
        )
    if args.reconnect_interval is not None:
        config = ClientConfig(
            socket_url=config.socket_url,
            reconnect_interval=parse_interval_ms(str(args.reconnect_interval)),
            autostart=config.autostart,
        )
    return config


async def watch(config: ClientConfig) -> None:
    """Run clients until cancelled; each document reload starts a fresh one."""

    while True:
        reloaded = asyncio.Event()
        document = Document()
        document.register_on_reload(lambda _document: reloaded.set())
        client = create_client(config, document)
        try:
            await client.start()
            await reloaded.wait()
        finally:
            await client.close()
        LOG.info("document reloaded, starting a new session")


def main(argv: List[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    try:
        config = resolve_config(args)
    except ConfigError as exc:
        print(f"watchjs: {exc}", file=sys.stderr)
        return 2
    LOG.info("watching %s", config.socket_url)
    try:
        asyncio.run(watch(config))
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
