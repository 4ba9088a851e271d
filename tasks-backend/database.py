import os
import pathlib
from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker

BACKEND_DIR = pathlib.Path(__file__).parent.resolve()


def load_env(backend_dir=BACKEND_DIR) -> None:
    load_dotenv()
    env_path = pathlib.Path(backend_dir) / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=False)


# before any setting below is read
load_env()

DEFAULT_DB_URL = "sqlite:///./data/data.db"
_env_url = (os.getenv("DATABASE_URL", "") or "").strip()
DATABASE_URL = _env_url or DEFAULT_DB_URL


def env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def ensure_sqlite_dir(url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    parsed = make_url(url)
    if not parsed.drivername.startswith("sqlite"):
        return
    db = parsed.database
    if not db or db == ":memory:":
        return
    pathlib.Path(db).expanduser().parent.mkdir(parents=True, exist_ok=True)


def make_engine(url: str):
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
    return create_engine(url, connect_args=connect_args)


engine = make_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None) -> None:
    # tblTasks is normally provisioned outside the service
    import models

    models.Base.metadata.create_all(bind=bind or engine)
