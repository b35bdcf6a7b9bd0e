"""Database configuration and connection setup"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from app.config.settings import get_settings

settings = get_settings()


def _build_engine(url: str):
    """Pooled engine for server databases, single shared connection for SQLite"""
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=False,
        )

    return create_engine(
        url,
        poolclass=QueuePool,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,
        echo=False,
    )


# Create database engine with connection pooling
engine = _build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Database dependency for FastAPI"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables():
    """Create all database tables that don't exist yet"""
    from app.models import Base

    print("Creating all tables...")
    Base.metadata.create_all(bind=engine)
    print("✅ Database tables created successfully!")


def drop_tables():
    """Drop all database tables"""
    from app.models import Base

    Base.metadata.drop_all(bind=engine)


if __name__ == "__main__":
    create_tables()
