# coding: utf-8
"""
Command-line entry point: settings, logging, startup connection, main loop.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from . import __version__
from .app import App
from .client import RedisGateway, StoreError
from .config import ConfigError, ConnectionSettings, load_settings
from .screen import run

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="redis-tui", description="Browse Redis keys in the terminal.")
    parser.add_argument("--host", help="Redis server host (default 127.0.0.1)")
    parser.add_argument("--port", type=int, help="Redis server port (default 6379)")
    parser.add_argument("--password", help="Redis password")
    parser.add_argument("--username", help="Redis ACL username")
    parser.add_argument("-d", "--db", type=int, help="Redis database number (default 0)")
    parser.add_argument("-u", "--url", help="Redis connection URL, takes precedence over host/port")
    parser.add_argument("--ssl", dest="use_ssl", action="store_const", const=True, help="Connect with TLS")
    parser.add_argument("--no-verify-ssl", dest="verify_ssl", action="store_const", const=False,
                        help="Skip TLS certificate verification")
    parser.add_argument("--timeout", type=float, help="Socket timeout in seconds (default 5)")
    parser.add_argument("--pattern", help="Only list keys matching this glob pattern (default *)")
    parser.add_argument("--config", type=Path, help="JSON config file (default ~/.redis_tui_config.json)")
    parser.add_argument("--log-file", type=Path, help="Write logs to this file")
    parser.add_argument("--log-level", default="INFO", help="Log level when --log-file is set (default INFO)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_settings(args: argparse.Namespace) -> Tuple[ConnectionSettings, str]:
    """Merge command-line flags over the config file."""
    settings, pattern = load_settings(args.config)
    settings = settings.merged(vars(args))
    return settings, args.pattern or pattern


def setup_logging(log_file: Optional[Path], level_str: str = "INFO") -> None:
    """Configure file logging; without a file nothing is emitted."""
    if log_file is None:
        return
    log_level = logging.getLevelName(level_str.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO
    logging.basicConfig(
        filename=str(log_file),
        level=log_level,
        format=LOG_FORMAT,
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    logger.info("Logging configured at level: %s", logging.getLevelName(log_level))


def open_gateway(app: App, settings: ConnectionSettings, pattern: str) -> Optional[RedisGateway]:
    """Connect the app, reporting failures in its status line."""
    descriptor = settings.describe()
    try:
        gateway = RedisGateway.from_settings(settings, pattern=pattern)
        if not gateway.ping():
            raise StoreError("Unable to ping Redis server")
    except StoreError as e:
        logger.warning("Connection to %s failed: %s", descriptor, e)
        app.set_status(f"Connection failed: {e} URL: {descriptor}")
        return None
    app.connect(gateway, descriptor)
    return gateway


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_file, args.log_level)
    try:
        settings, pattern = resolve_settings(args)
    except ConfigError as e:
        print(f"redis-tui: {e}", file=sys.stderr)
        sys.exit(2)

    app = App(connector=lambda a: open_gateway(a, settings, pattern) is not None)
    app.reload_keys()
    try:
        run(app)
    finally:
        if app.gateway is not None:
            app.gateway.close()
