import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Float, Integer, JSON, String
from vyom.database.connection import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    uuid = Column(String(36), unique=True, nullable=False, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, index=True, nullable=False)
    full_name = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)  # bcrypt hash
    role = Column(String(16), nullable=False, default="USER")  # USER | ADMIN
    status = Column(String(16), nullable=False, default="ACTIVE")  # ACTIVE | INACTIVE
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)


class ClothingItem(Base):
    __tablename__ = "clothing_items"

    id = Column(String(32), primary_key=True, default=_new_id)
    user_id = Column(String(36), index=True, nullable=False)  # owner's uuid
    name = Column(String(255), nullable=False)
    category = Column(String(50), index=True, nullable=False, default="other")
    colors = Column(JSON, nullable=False, default=list)
    seasons = Column(JSON, nullable=False, default=list)
    occasions = Column(JSON, nullable=False, default=list)
    brand = Column(String(255), nullable=True)
    size = Column(String(50), nullable=True)
    purchase_price = Column(Float, nullable=False, default=0.0)
    image_uri = Column(String(1000), nullable=True)
    wear_count = Column(Integer, nullable=False, default=0)
    favorite = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)


class UserProfile(Base):
    __tablename__ = "user_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), unique=True, index=True, nullable=False)
    display_name = Column(String(255), nullable=False, default="")
    bio = Column(String(2000), nullable=False, default="")
    avatar = Column(String(1000), nullable=True)
    style_personality = Column(JSON, nullable=False, default=list)
    favorite_colors = Column(JSON, nullable=False, default=list)
    sizes = Column(JSON, nullable=False, default=dict)
    preferences = Column(JSON, nullable=False, default=dict)
    location = Column(JSON, nullable=False, default=dict)
    settings = Column(JSON, nullable=False, default=dict)
    quiz_completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
