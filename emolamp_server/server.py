#!/usr/bin/env python3
"""CLI entrypoint for running the FastAPI app with Uvicorn."""

import argparse
import logging
import os

import uvicorn

from .config import get_settings


def main() -> None:
    settings = get_settings()
    default_host = settings.server_host
    default_port = settings.server_port

    parser = argparse.ArgumentParser(description="EmoLamp message relay and statistics server")
    parser.add_argument("--host", default=default_host, help=f"Host to bind (default: {default_host})")
    parser.add_argument("--port", type=int, default=default_port, help=f"Port to bind (default: {default_port})")
    parser.add_argument(
        "--mode",
        choices=["pubsub", "stats", "all"],
        default=None,
        help=f"Which API surface to serve (default: {settings.mode})",
    )
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    args = parser.parse_args()

    if args.mode:
        # Settings are read when the app module is imported, so the env must be set first
        os.environ["EMOLAMP_MODE"] = args.mode
        get_settings.cache_clear()

    # Request logging middleware replaces uvicorn's access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("watchfiles.main").setLevel(logging.WARNING)

    if args.reload:
        # For reload mode, use import string
        uvicorn.run(
            "emolamp_server.app:app",
            host=args.host,
            port=args.port,
            reload=args.reload,
            log_level="info",
            access_log=False,
        )
    else:
        from .app import app

        uvicorn.run(
            app,
            host=args.host,
            port=args.port,
            log_level="info",
            access_log=False,
        )


if __name__ == "__main__":  # pragma: no cover - CLI invocation guard
    main()
