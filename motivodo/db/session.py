import logging

from sqlmodel import create_engine, Session, SQLModel

from ..core.config import settings

log = logging.getLogger(__name__)


def _mask(url: str) -> str:
    if "://" not in url:
        return url
    scheme, rest = url.split("://", 1)
    if "@" in rest and ":" in rest.split("@", 1)[0]:
        creds, tail = rest.split("@", 1)
        user = creds.split(":", 1)[0]
        return f"{scheme}://{user}:***@{tail}"
    return url


# Helper function to ensure URL format is correct
def get_db_url() -> str:
    url = settings.DATABASE_URL.strip()
    if not url:
        return "sqlite:///./motivodo.db"
    # Hosted Postgres providers hand out postgres:// URLs, SQLAlchemy wants postgresql://
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    return url


db_url = get_db_url()
log.info("DB URL: %s", _mask(db_url))

# --- CONFIGURATION FOR SQLITE ---
if db_url.startswith("sqlite"):
    # Requests are served from a threadpool, so the connection must be shareable
    engine = create_engine(
        db_url,
        echo=settings.DB_ECHO,
        connect_args={"check_same_thread": False}
    )

# --- CONFIGURATION FOR POSTGRESQL ---
else:
    # Uses psycopg2-binary
    engine = create_engine(
        db_url,
        echo=settings.DB_ECHO,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10
    )


def create_db_and_tables() -> None:
    SQLModel.metadata.create_all(engine)


# Dependency: one session per request
def get_session():
    with Session(engine) as session:
        yield session
