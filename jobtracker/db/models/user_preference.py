from sqlalchemy import Column, Integer, String
from jobtracker.db.base import Base


class UserPreferenceRecord(Base):
    __tablename__ = "user_preferences"

    user_id = Column(String, primary_key=True)
    theme = Column(String, nullable=False, default="light")
    default_pagination = Column(Integer, nullable=False, default=20)
