from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from jobtracker.db.base import Base


class NoteRecord(Base):
    """A note row; the domain model embeds these inside their application."""
    __tablename__ = "notes"

    id = Column(String, primary_key=True)
    application_id = Column(String, ForeignKey("applications.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String, nullable=False, index=True)
    content = Column(Text, nullable=False)
    position = Column(Integer, nullable=False, default=0)  # order within the application
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    application = relationship("ApplicationRecord", back_populates="notes")

    __table_args__ = (
        Index("idx_notes_application_position", "application_id", "position"),
    )
