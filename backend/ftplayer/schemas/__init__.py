from .common import *
from .user import *
from .auth import *
from .ftp_server import *
from .watch_history import *
from .comment import *
from .working_ftp_server import *

__all__ = [
    # Common schemas
    "MessageResponse",
    "Pagination",

    # User / auth schemas
    "UserSummary",
    "UserResponse",
    "UserEnvelope",
    "SignupRequest",
    "LoginRequest",
    "TokenResponse",

    # FTP server schemas
    "FtpServerCreate",
    "FtpServerUpdate",
    "FtpServerResponse",
    "FtpServerSummary",
    "FtpServerEnvelope",
    "FtpServerListResponse",
    "ServerTypeInfo",
    "ServerTypeListResponse",
    "PingResponse",
    "ImageUrlResponse",

    # Watch history schemas
    "ProgressInfo",
    "ProgressUpdate",
    "EpisodeProgress",
    "SeasonProgress",
    "WatchProgressUpdate",
    "StatusUpdate",
    "EpisodeStatusUpdate",
    "EpisodeRef",
    "WatchHistoryResponse",
    "WatchHistoryEnvelope",
    "WatchHistoryListResponse",
    "WatchStats",
    "WatchStatsResponse",

    # Comment schemas
    "CommentCreate",
    "CommentUpdate",
    "CommentResponse",
    "CommentEnvelope",
    "CommentListResponse",

    # Working FTP server schemas
    "WorkingFtpServerRef",
    "WorkingFtpServerReplace",
    "WorkingFtpServerListResponse"
]
