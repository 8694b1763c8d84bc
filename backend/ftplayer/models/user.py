from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from ..core.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)  # stored lowercase
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    ftp_servers = relationship("FtpServer", back_populates="owner")
    comments = relationship("Comment", back_populates="user")
    watch_history = relationship("WatchHistory", back_populates="user")
    working_ftp_servers = relationship(
        "WorkingFtpServer",
        back_populates="user",
        order_by="WorkingFtpServer.position",
        cascade="all, delete-orphan"
    )
