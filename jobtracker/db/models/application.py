from sqlalchemy import Column, String, DateTime, JSON
from sqlalchemy.orm import relationship
from jobtracker.db.base import Base


class ApplicationRecord(Base):
    """
    One job application owned by one identity.
    
    Field values live in the opaque `data` payload keyed by custom field id.
    """
    __tablename__ = "applications"

    id = Column(String, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False)
    data = Column(JSON, nullable=False, default=dict)

    notes = relationship(
        "NoteRecord",
        back_populates="application",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="NoteRecord.position",
    )
