"""
Bootstrap a fresh database: schema, settings row, weekly hours, default activities.

Safe to run repeatedly; existing rows are left alone.

    python -m sportslot.init_db            # create_all + seed
    python -m sportslot.init_db --no-schema  # seed only (schema managed by alembic)
"""

import argparse
import logging

from sqlalchemy.orm import Session

from .database import SessionLocal, atomic, engine
from .models import Activities, Base
from .services.schedule.config import ensure_defaults

logger = logging.getLogger(__name__)


# ======================================================
# DEFAULTS
# ======================================================

DEFAULT_ACTIVITIES = (
    ("Golf", "⛳"),
    ("Tennis", "🎾"),
    ("Padel", "🏓"),
)


# ======================================================
# SEED
# ======================================================

def seed_defaults(db: Session) -> list[str]:
    """Insert whatever defaults are missing. Returns the names of activities added."""
    added = []
    with atomic(db):
        ensure_defaults(db)

        existing = {name for (name,) in db.query(Activities.name).all()}
        for order, (name, icon) in enumerate(DEFAULT_ACTIVITIES):
            if name in existing:
                continue
            db.add(Activities(name=name, icon=icon, enabled=1, sort_order=order))
            added.append(name)
    return added


# ======================================================
# ENTRYPOINT
# ======================================================

def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Initialize the SportSlot database")
    parser.add_argument("--no-schema", action="store_true", help="skip create_all (alembic owns the schema)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if not args.no_schema:
        Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        added = seed_defaults(db)
    finally:
        db.close()

    if added:
        logger.info(f"[BOOTSTRAP] Activities created: {', '.join(added)}")
    else:
        logger.info("[BOOTSTRAP] Defaults already present, nothing to do")


if __name__ == "__main__":
    main()
