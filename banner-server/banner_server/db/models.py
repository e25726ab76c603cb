"""SQLAlchemy ORM models."""
import uuid

from sqlalchemy import Column, Date, DateTime, Integer, String

from banner_server.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


class Banner(Base):
    __tablename__ = "banners"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    title = Column(String(255))
    alt_text = Column(String(255))
    start_date = Column(Date)
    end_date = Column(Date)
    remote_url = Column(String(1000), nullable=False)
    file_name = Column(String(255), nullable=False)
    content_type = Column(String(100), nullable=False)
    size_bytes = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
