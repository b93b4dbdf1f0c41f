"""
Release-phase helper: migrate the schema, then seed starter categories.

Reads the same settings as the app (`app.postpanel.config.load_settings`), so a
local run needs no extra environment. Production must name its database
explicitly and may not point at SQLite.

Usage:
  python scripts/release.py
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


def resolve_database_url(settings: Settings) -> str:
    if settings.env not in ("prod", "production"):
        return settings.database_url
    if not (os.environ.get("DATABASE_URL") or "").strip():
        raise RuntimeError("Missing required environment variable DATABASE_URL.")
    if settings.database_url.startswith("sqlite"):
        raise RuntimeError("Refusing to run release on sqlite DATABASE_URL in production. Set DATABASE_URL to Postgres.")
    return settings.database_url


def run_release(database_url: str | None = None) -> str:
    """Upgrade to head and seed. Returns the database URL that was used."""
    load_dotenv()
    settings = load_settings()
    db_url = database_url or resolve_database_url(settings)

    print("=== Post Panel release start ===", flush=True)
    print(f"ENV={settings.env}", flush=True)
    print("Running Alembic migrations...", flush=True)

    from alembic import command
    from alembic.config import Config

    cfg = Config(str(ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT / "migrations"))
    cfg.set_main_option("sqlalchemy.url", db_url)
    command.upgrade(cfg, "head")
    print("Migrations complete.", flush=True)

    print("Seeding starter categories (idempotent)...", flush=True)
    from scripts import init_db

    init_db.seed_only(database_url=db_url)
    print("=== Post Panel release done ===", flush=True)
    return db_url


def main() -> None:
    run_release()


if __name__ == "__main__":
    main()
