from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum, Boolean, JSON, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from datetime import datetime
import enum
from ..core.database import Base


class ServerType(enum.Enum):
    circle_ftp = "circleftp"
    dflix = "dflix"
    amader_ftp = "amaderftp"


class ServerCapability(enum.Enum):
    browse_home = "browse_home"
    browse_categories = "browse_categories"
    search = "search"
    watch = "watch"
    download = "download"
    filter_by_category = "filter_by_category"
    filter_by_year = "filter_by_year"
    filter_by_genre = "filter_by_genre"
    filter_by_quality = "filter_by_quality"
    pagination = "pagination"
    trending = "trending"
    tv_series = "tv_series"
    multi_file_content = "multi_file_content"
    single_file_content = "single_file_content"
    seasoned_episodes = "seasoned_episodes"
    view_counts = "view_counts"


class ContentType(enum.Enum):
    single_video = "single_video"
    series = "series"
    single_file = "single_file"
    multi_file = "multi_file"
    movie = "movie"
    tv_show = "tv_show"


# Content types whose progress is tracked per season/episode
EPISODIC_CONTENT_TYPES = (ContentType.series, ContentType.tv_show)


class PaginationStyle(enum.Enum):
    standard = "standard"
    offset = "offset"
    cursor = "cursor"
    none = "none"


class FtpServer(Base):
    __tablename__ = "ftp_servers"
    __table_args__ = (
        UniqueConstraint("user_id", "server_type", "name", name="uq_ftp_servers_user_type_name"),
        Index("ix_ftp_servers_user_active_priority", "user_id", "is_active", "priority"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    server_type = Column(Enum(ServerType), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    config = Column(JSON, nullable=False)  # Snapshot of the registry config at creation time
    isp_provider = Column(String, nullable=False)
    ping_url = Column(String, nullable=True)
    ui_url = Column(String, nullable=True)
    priority = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    owner = relationship("User", back_populates="ftp_servers")
