"""Vehicle SQLAlchemy model

A Vehicle is the persisted result of one successful registration: the form
fields, the retrieval URLs and storage keys of the uploaded documents, and
the owning user. Rows are written once and never updated.
"""

from uuid import uuid4

from sqlalchemy import Column, DateTime, Index, Integer, Text, Uuid
from sqlalchemy.sql import func

from .base import Base, PortableJSONB


class Vehicle(Base):
    """Registered vehicle owned by one user.

    document_urls maps a document type value (e.g. "soap") to the retrieval
    URL of its uploaded PDF. Only documents that were actually uploaded have
    an entry. document_paths maps the same keys to storage keys, so links
    can be resolved again once a presigned URL has expired. created_at is
    stamped by the database, never by the client.
    """
    __tablename__ = "vehicle"
    __table_args__ = (
        Index("ix_vehicle_owner_id", "owner_id"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    owner_id = Column(Text, nullable=False)
    brand = Column(Text, nullable=False)
    model = Column(Text, nullable=False)
    year = Column(Integer, nullable=False)
    plate = Column(Text, nullable=False)
    document_urls = Column(PortableJSONB, nullable=False, default=dict)
    document_paths = Column(PortableJSONB, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    def to_dict(self):
        """Convert vehicle to dictionary representation"""
        return {
            "id": str(self.id),
            "owner_id": self.owner_id,
            "brand": self.brand,
            "model": self.model,
            "year": self.year,
            "plate": self.plate,
            "document_urls": dict(self.document_urls or {}),
            "document_paths": dict(self.document_paths or {}),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
