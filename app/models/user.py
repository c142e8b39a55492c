from sqlalchemy import Column, Date, DateTime, Integer, String
from app.database import Base, utcnow


class Account(Base):
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)

    # Registration fields
    salutation = Column(String, nullable=False)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    phone_number = Column(String, unique=True, index=True, nullable=False)
    date_of_birth = Column(Date, nullable=False)
    address = Column(String, nullable=False)

    # bcrypt hash, never the plaintext
    password_hash = Column(String, nullable=False)

    profile_photo = Column(String, nullable=True)     # stored file reference
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
