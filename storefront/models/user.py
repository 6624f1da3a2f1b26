"""
User model
Registered customers only; the administrative account has no row here
"""

from sqlalchemy import Column, Integer, String, Boolean

from .base import Base, CreatedAtModel


class User(Base, CreatedAtModel):
    """Registered customer"""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(100), nullable=False)
    phone = Column(String(30), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

