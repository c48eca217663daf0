from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from launchpad.core.config import get_settings

settings = get_settings()

database_url = settings.database_url or "sqlite:///./launchpad.db"
connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}

engine = create_engine(
    database_url,
    echo=settings.db_echo,
    pool_pre_ping=True,
    connect_args=connect_args,
    future=True,
)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
