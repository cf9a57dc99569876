"""
User model - identity comes from the external provider, profile from onboarding
"""
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime

from backend.database import Base


class User(Base):
    __tablename__ = "users"

    # Subject claim of the identity token
    id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    profile_image_url = Column(String, nullable=True)

    # Onboarding profile
    industry = Column(String, nullable=True)
    team_size = Column(String, nullable=True)
    business_description = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    folders = relationship("Folder", back_populates="owner")
    files = relationship("UploadedFile", back_populates="owner")
    ai_commands = relationship("AICommand", back_populates="owner")
