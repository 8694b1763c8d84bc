from pydantic import AliasChoices, BaseModel, Field, validator
from typing import Optional, Dict, Any, List
from datetime import datetime
from ..models.ftp_server import ServerType, ContentType
from ..models.watch_history import WatchStatus
from .common import Pagination
from .ftp_server import FtpServerSummary


class ProgressInfo(BaseModel):
    current_time: float = 0
    duration: float = 0
    percentage: float = 0


class ProgressUpdate(BaseModel):
    """Partial progress, only the fields sent are merged into the stored triple"""
    current_time: Optional[float] = Field(None, ge=0)
    duration: Optional[float] = Field(None, ge=0)
    percentage: Optional[float] = Field(None, ge=0, le=100)


class EpisodeProgress(BaseModel):
    episode_number: int
    episode_id: Optional[str] = None
    episode_title: Optional[str] = None
    status: WatchStatus = WatchStatus.watching
    progress: ProgressInfo = Field(default_factory=ProgressInfo)
    last_watched_at: Optional[datetime] = None


class SeasonProgress(BaseModel):
    season_number: int
    season_id: Optional[str] = None
    episodes: List[EpisodeProgress] = Field(default_factory=list)


class WatchProgressUpdate(BaseModel):
    ftp_server_id: int
    server_type: ServerType
    content_type: ContentType
    content_id: str = Field(..., min_length=1)
    content_title: Optional[str] = None
    status: Optional[WatchStatus] = None
    progress: Optional[ProgressUpdate] = None
    season_number: Optional[int] = Field(None, ge=0)
    season_id: Optional[str] = None
    episode_number: Optional[int] = Field(None, ge=0)
    episode_id: Optional[str] = None
    episode_title: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @validator('content_id', 'episode_id', 'season_id', pre=True)
    def coerce_identifier(cls, v):
        # Upstream providers mix numeric and string ids
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class StatusUpdate(BaseModel):
    status: WatchStatus


class EpisodeStatusUpdate(BaseModel):
    season_number: int
    episode_number: int
    status: WatchStatus


class EpisodeRef(BaseModel):
    season_number: int
    episode_number: int


class WatchHistoryResponse(BaseModel):
    id: int
    user_id: int
    ftp_server_id: int
    server_type: ServerType
    content_type: ContentType
    content_id: str
    content_title: str
    status: WatchStatus
    progress: Optional[ProgressInfo] = None
    series_progress: List[SeasonProgress] = Field(default_factory=list)
    metadata: Optional[Dict[str, Any]] = Field(None, validation_alias=AliasChoices("watch_metadata", "metadata"))
    last_watched_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    ftp_server: Optional[FtpServerSummary] = None

    @validator('series_progress', pre=True)
    def default_series_progress(cls, v):
        return v or []

    class Config:
        from_attributes = True


class WatchHistoryEnvelope(BaseModel):
    message: str
    watch_history: Optional[WatchHistoryResponse] = None


class WatchHistoryListResponse(BaseModel):
    message: str
    watch_histories: List[WatchHistoryResponse]
    pagination: Pagination


class WatchStats(BaseModel):
    by_status: Dict[str, int]
    by_content_type: Dict[str, int]
    # Sum of flat progress.current_time only, time inside episodes is not counted
    total_watch_time: float


class WatchStatsResponse(BaseModel):
    message: str
    stats: WatchStats
    recently_watched: List[WatchHistoryResponse]
