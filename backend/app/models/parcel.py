"""
Parcel database model.

A parcel is a shipping record owned by a client. The table is kept flat:
no foreign keys and no indices beyond the primary key.
"""

from sqlalchemy import Column, Integer, String, Text
from backend.app.db.session import Base


class Parcel(Base):
    """
    Parcel model for the tracker.
    
    ``number`` is assigned by the database on insert and never reused.
    ``status`` is stored as plain text; see ``ParcelStatus`` for the
    values the service layer knows about.
    """
    __tablename__ = "parcel"
    __table_args__ = {"sqlite_autoincrement": True}
    
    number = Column(Integer, primary_key=True, autoincrement=True)
    client = Column(Integer, nullable=False)
    status = Column(String(128), nullable=False)
    address = Column(Text, nullable=False)
    
    # RFC 3339 text, written by the caller
    created_at = Column(String(64), nullable=False)
    
    def __repr__(self):
        return f"<Parcel(number={self.number}, client={self.client}, status='{self.status}')>"
