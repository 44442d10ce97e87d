import sys, pathlib

BACKEND_DIR = pathlib.Path(__file__).resolve().parents[1] / "backend"
sys.path.append(str(BACKEND_DIR))

from alembic import command
from alembic.config import Config

from sportslot.config import settings


def apply_migrations(revision: str = "head"):
    print(f"Using DB: {settings.resolved_database_url}")
    config = Config(str(BACKEND_DIR / "alembic.ini"))
    config.set_main_option("script_location", str(BACKEND_DIR / "alembic"))
    command.upgrade(config, revision)
    print("All migrations applied.")


if __name__ == "__main__":
    apply_migrations(sys.argv[1] if len(sys.argv) > 1 else "head")
