# messagely/models/user.py

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from messagely.models.base import Base, utcnow


class User(Base):
    __tablename__ = "users"

    # Primary key doubles as the uniqueness constraint for registration
    username = Column(String(100), primary_key=True)

    # bcrypt hash, never the plain password
    password = Column(String, nullable=False)

    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    phone = Column(String, nullable=False)

    join_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    last_login_at = Column(DateTime(timezone=True), default=utcnow)

    sent_messages = relationship(
        "Message", foreign_keys="Message.from_username", back_populates="from_user"
    )
    received_messages = relationship(
        "Message", foreign_keys="Message.to_username", back_populates="to_user"
    )

    def public_profile(self) -> dict:
        return {
            "username": self.username,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone": self.phone,
        }
