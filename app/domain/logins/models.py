from sqlalchemy import Column, Integer, Text

from app.core.database import Base


class LoginRecord(Base):
    """One recorded login attempt."""

    __tablename__ = "logins"
    # AUTOINCREMENT keeps ids in sqlite_sequence, which purge resets.
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    email = Column(Text, nullable=False)
    phone = Column(Text, nullable=False)
    timestamp = Column(Text, nullable=False)  # ISO-8601, UTC
    user_agent = Column("userAgent", Text, nullable=True)

    def __repr__(self) -> str:
        return f"<LoginRecord(id={self.id}, email={self.email})>"


__all__ = ["LoginRecord"]
