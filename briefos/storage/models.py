"""
Database models for brief history.
Uses SQLite with SQLAlchemy for easy migration to cloud later.
"""

from sqlalchemy import Column, DateTime, Index, Integer, String, Text, create_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import QueuePool

Base = declarative_base()


class BriefRow(Base):
    """One generated brief. Rows are only ever inserted."""
    __tablename__ = 'briefs'
    __table_args__ = (
        Index('idx_briefs_created_at', 'created_at'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(String(10), nullable=False)  # YYYY-MM-DD
    content = Column(Text, nullable=False)  # Serialized BriefDocument JSON
    created_at = Column(DateTime, nullable=False)


# Database initialization
def init_db(db_path: str = 'briefs.db'):
    """Initialize the database with connection pooling."""
    engine = create_engine(
        f'sqlite:///{db_path}',
        echo=False,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=10,
        pool_timeout=30,
        pool_recycle=1800,  # Recycle connections after 30 minutes
        connect_args={'check_same_thread': False}  # Required for SQLite with threading
    )
    Base.metadata.create_all(engine)
    return engine
