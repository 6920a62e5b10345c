"""ORM model for stored refresh-token hashes."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from gatehouse.models.base import Base, utcnow


class RefreshToken(Base):
    """One row per issued, unrevoked refresh token. The raw token is never stored."""

    __tablename__ = "refresh_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    token_hash = Column(String(64), nullable=False, unique=True, index=True)
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
