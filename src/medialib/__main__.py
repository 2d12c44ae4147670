"""Run the media library API.

Usage:
    python -m medialib
    python -m medialib --port 4100 --db data/other.db
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
from pathlib import Path

import uvicorn

from medialib.config import load_settings


def main(argv: list[str] | None = None) -> None:
    settings = load_settings()

    parser = argparse.ArgumentParser(description="Media library API server")
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    parser.add_argument("--db", type=Path, default=settings.db_path, help="SQLite database file")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = dataclasses.replace(settings, host=args.host, port=args.port, db_path=args.db)

    from medialib.api.app import create_app

    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
