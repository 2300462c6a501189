from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from hireboard.core.config import settings
from hireboard.db.base import Base

connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """Create the tables (and their indexes) if they do not exist yet."""
    # Import models so SQLAlchemy can discover them for table creation
    from hireboard.models import UserRecord  # noqa: F401

    Base.metadata.create_all(bind=engine)
