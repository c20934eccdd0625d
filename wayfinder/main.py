"""Application entry point for the Wayfinder backend.

Run locally:
    uvicorn wayfinder.main:app --reload --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, MutableMapping

import uvicorn

from wayfinder.api import create_app

PACKAGE_DIR = Path(__file__).resolve().parent


def _parse_env_line(line: str) -> tuple[str, str] | None:
    line = line.strip()
    if not line or line.startswith("#"):
        return None
    if line.startswith("export "):
        line = line[len("export "):].lstrip()
    key, sep, value = line.partition("=")
    key = key.strip()
    if not sep or not key:
        return None
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
        value = value[1:-1]
    return key, value


def load_env_files(paths: Iterable[Path], environ: MutableMapping[str, str] | None = None) -> list[str]:
    """Copy `KEY=value` settings from dotenv-style files into the environment.

    Files are read in order and a key is only set while it is still missing,
    so real environment variables and earlier files take precedence.

    Returns:
        The keys that were added.
    """
    env = os.environ if environ is None else environ
    added: list[str] = []
    for env_path in paths:
        if not env_path.is_file():
            continue
        for raw in env_path.read_text(encoding="utf-8").splitlines():
            parsed = _parse_env_line(raw)
            if parsed is None or parsed[0] in env:
                continue
            env[parsed[0]] = parsed[1]
            added.append(parsed[0])
    return added


def _configure_logging() -> None:
    level = os.getenv("WAYFINDER_LOG_LEVEL", "INFO").strip().upper() or "INFO"
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


load_env_files([PACKAGE_DIR / ".env", Path(".env")])
_configure_logging()
app = create_app()


if __name__ == "__main__":
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))
    reload_enabled = os.getenv("API_RELOAD", "true").lower() == "true"
    uvicorn.run("wayfinder.main:app", host=host, port=port, reload=reload_enabled)
