#!/usr/bin/env python3
"""
Production entry point: run the release phase, then exec gunicorn on
`app.wsgi:app`.

Environment:
  PORT             listen port (default 8080)
  WEB_CONCURRENCY  gunicorn workers (default 2)
  LOG_LEVEL        shared with the app; forwarded to gunicorn

Usage:
    python scripts/start.py
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.postpanel.config import Settings, load_settings

DEFAULT_PORT = 8080
DEFAULT_WORKERS = 2
GUNICORN_LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


def resolve_port(raw: str | None) -> int:
    raw = (raw or "").strip()
    if not raw:
        return DEFAULT_PORT
    port = int(raw)
    if port < 1 or port > 65535:
        raise ValueError(f"Port out of range: {port}")
    return port


def resolve_workers(raw: str | None) -> int:
    try:
        workers = int((raw or "").strip())
    except ValueError:
        return DEFAULT_WORKERS
    return workers if workers >= 1 else DEFAULT_WORKERS


def gunicorn_argv(settings: Settings, port: int, workers: int) -> list[str]:
    log_level = settings.log_level.lower()
    if log_level == "warn":
        log_level = "warning"
    if log_level not in GUNICORN_LOG_LEVELS:
        log_level = "info"
    return [
        "gunicorn",
        "app.wsgi:app",
        "--bind", f"0.0.0.0:{port}",
        "--workers", str(workers),
        "--timeout", "60",
        "--preload",
        "--log-level", log_level,
        "--access-logfile", "-",
        "--error-logfile", "-",
    ]


def main() -> None:
    load_dotenv()
    settings = load_settings()

    try:
        port = resolve_port(os.environ.get("PORT"))
    except ValueError as e:
        print(f"ERROR: Invalid PORT value: {e}. Must be integer 1-65535.", flush=True)
        sys.exit(1)

    from scripts.release import run_release
    try:
        run_release()
    except Exception as e:
        print(f"Release failed: {e}", flush=True)
        sys.exit(1)

    argv = gunicorn_argv(settings, port, resolve_workers(os.environ.get("WEB_CONCURRENCY")))
    print(f"=== Starting gunicorn on 0.0.0.0:{port} (env={settings.env}) ===", flush=True)
    # exec keeps gunicorn as PID 1 so it receives signals directly
    os.execvp(argv[0], argv)


if __name__ == "__main__":
    main()
