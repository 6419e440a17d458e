from sqlalchemy import Column, Integer, String, Boolean, JSON, Index
from jobtracker.db.base import Base


class CustomFieldRecord(Base):
    """One user-defined field, one row per (user, field)."""
    __tablename__ = "custom_fields"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, nullable=False, index=True)
    field_id = Column(String, nullable=False)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)  # text, textarea, date, select, number, checkbox
    required = Column(Boolean, nullable=False, default=False)
    order = Column("order", Integer, nullable=False)
    show_in_table = Column(Boolean, nullable=False, default=True)
    options = Column(JSON, nullable=True)
    default_value = Column(JSON, nullable=True)

    __table_args__ = (
        Index("idx_custom_fields_user_field", "user_id", "field_id", unique=True),
    )
