# backend/blueprint/database.py
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import settings
from .errors import ConstraintViolation
from .utils.logging import db_logger

SQLALCHEMY_DATABASE_URL = str(settings.DATABASE_URL)
db_logger.info(f"Connecting to database: {SQLALCHEMY_DATABASE_URL}")

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False} if SQLALCHEMY_DATABASE_URL.startswith("sqlite") else {},
    echo=False  # This will log all SQL statements
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def commit_or_raise(db, **context) -> None:
    """Commit the session, turning integrity errors into ConstraintViolation"""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        db_logger.warning("Integrity error on commit", extra={**context, "error": str(e.orig)})
        raise ConstraintViolation(str(e.orig)) from e
