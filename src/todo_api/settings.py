from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List

# <project root>/data/todos.json
DEFAULT_TODOS_FILE_PATH = str(Path(__file__).resolve().parents[2] / "data" / "todos.json")
DEFAULT_PORT = 3000
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - PORT: TCP port the server listens on (default 3000)
    - HOST: interface the server binds to (default '0.0.0.0')
    - TODOS_FILE_PATH: path of the JSON file holding the todo collection.
      Default '<project root>/data/todos.json'
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - LOG_LEVEL: DEBUG, INFO (default), WARNING, ERROR or CRITICAL
    """

    port: int
    host: str
    todos_file_path: str
    cors_allow_origins: List[str]
    log_level: str


def _env(name: str, default: str) -> str:
    # An exported-but-empty variable counts as unset
    return os.environ.get(name) or default


def _parse_port(value: str, default: int = DEFAULT_PORT) -> int:
    try:
        port = int(value.strip())
    except ValueError:
        return default
    if not (0 < port < 65536):
        return default
    return port


def _split_origins(raw: str) -> List[str]:
    """Comma-separated origins; a blank list means every origin is allowed."""
    origins = [part.strip() for part in raw.split(",")]
    return [origin for origin in origins if origin] or ["*"]


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    log_level = _env("LOG_LEVEL", "INFO").strip().upper()
    if log_level not in _LOG_LEVELS:
        log_level = "INFO"

    return Settings(
        port=_parse_port(_env("PORT", str(DEFAULT_PORT))),
        host=_env("HOST", "0.0.0.0").strip(),
        todos_file_path=_env("TODOS_FILE_PATH", DEFAULT_TODOS_FILE_PATH).strip(),
        cors_allow_origins=_split_origins(_env("CORS_ALLOW_ORIGINS", "*")),
        log_level=log_level,
    )
