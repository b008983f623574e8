from api.config import Base
from sqlalchemy import Column, String, Text, DateTime
from datetime import datetime


class Profile(Base):
    __tablename__ = "profiles"
    user_id = Column(String, primary_key=True, index=True)  # id issued by the identity provider
    display_name = Column(String, nullable=True)
    bio = Column(Text, nullable=True)
    academic_level = Column(String, nullable=True)
    avatar_url = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
