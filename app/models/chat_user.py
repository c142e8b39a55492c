from sqlalchemy import JSON, Column, Date, DateTime, Integer, String, Text
from app.database import Base, utcnow


class ChatProfile(Base):
    """Phone-keyed profile for the chat screen, unrelated to accounts."""

    __tablename__ = "chat_profiles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    qualification = Column(String, nullable=False)
    phone = Column(String, unique=True, index=True, nullable=False)
    dob = Column(Date, nullable=False)
    about = Column(Text, nullable=False)
    skills = Column(JSON, nullable=False, default=list)
    profile_photo = Column(String, nullable=True)
    document = Column(String, nullable=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
