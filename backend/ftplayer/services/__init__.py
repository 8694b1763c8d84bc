from .auth_service import AuthService
from .user_service import UserService
from .ftp_server_service import FtpServerService
from .watch_history_service import WatchHistoryService
from .comment_service import CommentService
from .working_ftp_server_service import WorkingFtpServerService

__all__ = [
    "AuthService",
    "UserService",
    "FtpServerService",
    "WatchHistoryService",
    "CommentService",
    "WorkingFtpServerService"
]
