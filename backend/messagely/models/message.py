from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from messagely.models.base import Base, utcnow


class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, autoincrement=True)

    from_username = Column(
        String(100), ForeignKey("users.username"), index=True, nullable=False
    )
    to_username = Column(
        String(100), ForeignKey("users.username"), index=True, nullable=False
    )

    body = Column(Text, nullable=False)

    sent_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Set once by the recipient, never cleared
    read_at = Column(DateTime(timezone=True), nullable=True)

    from_user = relationship(
        "User", foreign_keys=[from_username], back_populates="sent_messages"
    )
    to_user = relationship(
        "User", foreign_keys=[to_username], back_populates="received_messages"
    )
