import sys, pathlib
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1] / "backend"))

from sqlalchemy import text
from sportslot.database import SessionLocal
from sportslot.models import Activities, TimeSlots
from sportslot.services.schedule.versioning import get_data_version


def main():
    db = SessionLocal()
    try:
        print("DB OK:", db.execute(text("SELECT 1")).scalar())
        print("Activities:", db.query(Activities).count())
        print("Slots:", db.query(TimeSlots).count())
        print("Data version:", get_data_version(db))
    finally:
        db.close()


if __name__ == "__main__":
    main()
