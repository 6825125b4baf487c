from sqlalchemy import Column, Integer, String, DateTime, Index

from record_collection.utils.settings import get_settings
from .base import Base, now_utc

RECORDS_TABLE = get_settings().records_table_name


class Record(Base):
    __tablename__ = RECORDS_TABLE

    id = Column(Integer, primary_key=True, autoincrement=True)
    artist = Column(String(255), nullable=False)
    title = Column(String(255), nullable=False)
    label = Column(String(255), nullable=False)
    catalog_no = Column(String(64), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    # Index names follow the configured table so renamed tables don't collide
    __table_args__ = (
        Index(f'ix_{RECORDS_TABLE}_label_artist_title', 'label', 'artist', 'title'),
        Index(f'ix_{RECORDS_TABLE}_artist', 'artist'),
        Index(f'ix_{RECORDS_TABLE}_catalog_no', 'catalog_no'),
    )

    def __repr__(self) -> str:
        return f"<Record id={self.id} artist={self.artist!r} title={self.title!r}>"
