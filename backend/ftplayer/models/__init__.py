from ..core.database import Base
from .user import User
from .ftp_server import FtpServer, ServerType, ServerCapability, ContentType, PaginationStyle
from .watch_history import WatchHistory, WatchStatus
from .comment import Comment
from .working_ftp_server import WorkingFtpServer

__all__ = [
    "Base",
    "User",
    "FtpServer",
    "ServerType",
    "ServerCapability",
    "ContentType",
    "PaginationStyle",
    "WatchHistory",
    "WatchStatus",
    "Comment",
    "WorkingFtpServer"
]
