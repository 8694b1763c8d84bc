from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum, JSON, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from datetime import datetime
import enum
from ..core.database import Base
from .ftp_server import ServerType, ContentType


class WatchStatus(enum.Enum):
    watching = "watching"
    completed = "completed"
    on_hold = "on_hold"
    dropped = "dropped"


class WatchHistory(Base):
    """Per-user viewing state of one content item on one source.

    ``progress`` holds the flat ``{current_time, duration, percentage}`` triple
    for content without episodes. Series keep their state in
    ``series_progress``, a list of seasons::

        [{"season_number": 1, "season_id": None,
          "episodes": [{"episode_number": 1, "episode_id": "...",
                        "episode_title": "...", "status": "watching",
                        "progress": {...}, "last_watched_at": "<iso>"}]}]
    """
    __tablename__ = "watch_history"
    __table_args__ = (
        UniqueConstraint("user_id", "ftp_server_id", "content_id", name="uq_watch_history_user_server_content"),
        Index("ix_watch_history_user_status", "user_id", "status"),
        Index("ix_watch_history_user_last_watched", "user_id", "last_watched_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    ftp_server_id = Column(Integer, nullable=False)  # No FK, records outlive deleted sources
    server_type = Column(Enum(ServerType), nullable=False)
    content_type = Column(Enum(ContentType), nullable=False)
    content_id = Column(String, nullable=False)
    content_title = Column(String, nullable=False)
    status = Column(Enum(WatchStatus), nullable=False, default=WatchStatus.watching)
    progress = Column(JSON, nullable=True)
    series_progress = Column(JSON, nullable=True)
    watch_metadata = Column(JSON, nullable=True)
    last_watched_at = Column(DateTime, default=datetime.utcnow)
    completed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="watch_history")
    ftp_server = relationship(
        "FtpServer",
        primaryjoin="foreign(WatchHistory.ftp_server_id) == FtpServer.id",
        viewonly=True
    )
