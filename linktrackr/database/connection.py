from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from linktrackr.config import settings

# SQLite connections are shared with the threadpool that runs sync work
connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = create_engine(settings.database_url, connect_args=connect_args, pool_pre_ping=True)
SessionLocal = sessionmaker(autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Yield a database session and close it when the request is done"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
