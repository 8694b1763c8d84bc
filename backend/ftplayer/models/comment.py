from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum, Index
from sqlalchemy.orm import relationship
from datetime import datetime
from ..core.database import Base
from .ftp_server import ServerType, ContentType


class Comment(Base):
    __tablename__ = "comments"
    __table_args__ = (
        Index("ix_comments_server_content", "ftp_server_id", "content_id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    ftp_server_id = Column(Integer, nullable=False)  # No FK, comments outlive deleted sources
    server_type = Column(Enum(ServerType), nullable=False)
    content_type = Column(Enum(ContentType), nullable=False)
    content_id = Column(String, nullable=False)
    content_title = Column(String, nullable=False)
    comment = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="comments")
