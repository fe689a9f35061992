#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging

import uvicorn

from firestore_model.settings import load_settings


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the firestore_model Web API backed by Firestore.")
    parser.add_argument("--host", default="127.0.0.1", help="Bind host. Default: 127.0.0.1")
    parser.add_argument("--port", type=int, default=8000, help="Bind port. Default: 8000")
    parser.add_argument("--reload", action="store_true", help="Enable auto reload.")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    settings = load_settings()
    logging.basicConfig(level=settings.log_level_value, format="%(levelname)s %(name)s %(message)s")
    uvicorn.run(
        "firestore_model.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
