"""ORM model for application users."""

from sqlalchemy import Column, DateTime, String

from gatehouse.models.base import Base, new_id, utcnow


class User(Base):
    """
    User account. email is unique; password_hash is an Argon2id hash and never
    leaves the service layer.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
