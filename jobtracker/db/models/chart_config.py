from sqlalchemy import Column, String, JSON
from jobtracker.db.base import Base


class ChartConfigRecord(Base):
    """Chart and overview card descriptors, one row per user."""
    __tablename__ = "chart_configs"

    user_id = Column(String, primary_key=True)
    charts = Column(JSON, nullable=False, default=list)
    overview_cards = Column(JSON, nullable=False, default=list)
