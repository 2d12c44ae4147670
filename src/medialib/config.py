"""Runtime configuration read from the environment.

MEDIALIB_DB_PATH       SQLite database file (data/medialib.db)
MEDIALIB_HOST          listen host (0.0.0.0)
PORT                   listen port (4000)
MEDIALIB_API_URL       base URL the client talks to (http://localhost:4000/)
MEDIALIB_CORS_ORIGINS  comma-separated allowed origins (*)
MEDIALIB_LOG_LEVEL     root log level (INFO)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

DEFAULT_PORT = 4000


@dataclass(frozen=True)
class Settings:
    """Service and client settings."""

    db_path: Path = Path("data/medialib.db")
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    api_base_url: str = f"http://localhost:{DEFAULT_PORT}/"
    cors_origins: tuple[str, ...] = ("*",)
    log_level: str = "INFO"


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from environment variables.

    Args:
        environ: Mapping to read from. Defaults to os.environ.

    Raises:
        ValueError: If PORT is not an integer.
    """
    env = os.environ if environ is None else environ
    defaults = Settings()

    origins = env.get("MEDIALIB_CORS_ORIGINS")
    cors_origins = (
        tuple(o.strip() for o in origins.split(",") if o.strip())
        if origins
        else defaults.cors_origins
    )

    return Settings(
        db_path=Path(env.get("MEDIALIB_DB_PATH", str(defaults.db_path))),
        host=env.get("MEDIALIB_HOST", defaults.host),
        port=int(env.get("PORT", defaults.port)),
        api_base_url=env.get("MEDIALIB_API_URL", defaults.api_base_url),
        cors_origins=cors_origins,
        log_level=env.get("MEDIALIB_LOG_LEVEL", defaults.log_level).upper(),
    )
