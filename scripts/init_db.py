import sys
from pathlib import Path
import os

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from contextlib import contextmanager

# Ensure repo root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.postpanel.models import Category

STARTER_CATEGORIES = ("News", "Tutorials", "Announcements")


@contextmanager
def _session_scope(database_url: str):
    engine = create_engine(database_url, future=True)
    sm = sessionmaker(bind=engine, class_=Session, autoflush=False, autocommit=False, expire_on_commit=False, future=True)
    s: Session = sm()
    try:
        yield s
        s.commit()
    except Exception:
        s.rollback()
        raise
    finally:
        s.close()


def seed_only(*, database_url: str | None = None) -> None:
    """
    Seed starter categories in an idempotent way.
    Existing categories (matched by name) are left alone.
    """
    db_url = (database_url or os.environ.get("DATABASE_URL") or "sqlite:///postpanel.db").strip()
    raw = os.environ.get("SEED_CATEGORIES")
    names = [n.strip() for n in raw.split(",") if n.strip()] if raw else list(STARTER_CATEGORIES)

    created = 0
    with _session_scope(db_url) as s:
        for name in names:
            existing = s.query(Category).filter(Category.name == name).one_or_none()
            if not existing:
                s.add(Category(name=name))
                created += 1

    print("Initialized database (seed_only).")
    print(f"Categories created: {created} (of {len(names)} requested)")


def main() -> None:
    seed_only(database_url=None)


if __name__ == "__main__":
    main()
