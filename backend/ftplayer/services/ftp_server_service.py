from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import httpx
import logging
import time

from ..core.config import settings
from ..core.exceptions import ConflictError, NotFoundError
from ..models.ftp_server import FtpServer, ServerType
from ..providers import registry
from ..providers.base import ImageKind
from ..schemas.ftp_server import FtpServerCreate, FtpServerUpdate

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = "An FTP server with this name and server type already exists"


class FtpServerService:
    def __init__(self, db: Session):
        self.db = db

    def _ordered(self, query):
        return query.order_by(
            FtpServer.priority.desc(),
            FtpServer.created_at.desc(),
            FtpServer.id.desc()
        )

    def get_server_by_id(self, server_id: int) -> Optional[FtpServer]:
        """Any owner's server, used where sources are shared (comments, working lists)"""
        return self.db.query(FtpServer).filter(FtpServer.id == server_id).first()

    def get_server(self, user_id: int, server_id: int) -> FtpServer:
        server = self.db.query(FtpServer).filter(
            FtpServer.id == server_id,
            FtpServer.user_id == user_id
        ).first()

        if not server:
            raise NotFoundError("FTP server not found")
        return server

    def list_servers(
        self,
        user_id: int,
        is_active: Optional[bool] = None,
        server_type: Optional[ServerType] = None
    ) -> List[FtpServer]:
        query = self.db.query(FtpServer).filter(FtpServer.user_id == user_id)

        if is_active is not None:
            query = query.filter(FtpServer.is_active == is_active)
        if server_type is not None:
            query = query.filter(FtpServer.server_type == server_type)

        return self._ordered(query).all()

    def list_public_servers(self, server_type: Optional[ServerType] = None) -> List[FtpServer]:
        """Active servers of every user"""
        query = self.db.query(FtpServer).filter(FtpServer.is_active == True)

        if server_type is not None:
            query = query.filter(FtpServer.server_type == server_type)

        return self._ordered(query).all()

    def _ensure_unique_name(
        self,
        user_id: int,
        server_type: ServerType,
        name: str,
        exclude_id: Optional[int] = None
    ):
        query = self.db.query(FtpServer).filter(
            FtpServer.user_id == user_id,
            FtpServer.server_type == server_type,
            FtpServer.name == name
        )
        if exclude_id is not None:
            query = query.filter(FtpServer.id != exclude_id)

        if query.first():
            raise ConflictError(DUPLICATE_NAME_MESSAGE)

    def _commit(self):
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(DUPLICATE_NAME_MESSAGE)

    def create_server(self, user_id: int, server_data: FtpServerCreate) -> FtpServer:
        self._ensure_unique_name(user_id, server_data.server_type, server_data.name)

        server = FtpServer(
            **server_data.model_dump(),
            user_id=user_id,
            config=registry.snapshot_config(server_data.server_type)
        )
        self.db.add(server)
        self._commit()
        self.db.refresh(server)

        logger.info(f"User {user_id} created FTP server {server.id} ({server.server_type.value})")
        return server

    def update_server(self, user_id: int, server_id: int, server_data: FtpServerUpdate) -> FtpServer:
        server = self.get_server(user_id, server_id)
        changes = server_data.model_dump(exclude_unset=True)

        # Explicit nulls only make sense for the optional text fields
        for field in ("name", "isp_provider", "priority", "is_active"):
            if changes.get(field, "") is None:
                changes.pop(field)

        if "name" in changes and changes["name"] != server.name:
            self._ensure_unique_name(user_id, server.server_type, changes["name"], exclude_id=server.id)

        for field, value in changes.items():
            setattr(server, field, value)

        self._commit()
        self.db.refresh(server)
        return server

    def delete_server(self, user_id: int, server_id: int):
        # Comments, watch history and working lists keep their now dangling ids
        server = self.get_server(user_id, server_id)
        self.db.delete(server)
        self.db.commit()
        logger.info(f"User {user_id} deleted FTP server {server_id}")

    def build_image_url(
        self,
        user_id: int,
        server_id: int,
        image_path: str,
        image_kind: ImageKind = ImageKind.poster,
        content_id: Optional[str] = None
    ) -> str:
        server = self.get_server(user_id, server_id)
        return registry.build_image_url(server.server_type, image_path, image_kind, content_id)

    async def ping_server(self, user_id: int, server_id: int) -> Dict[str, Any]:
        """Check whether the source answers on its ping URL (or its API base URL)"""
        server = self.get_server(user_id, server_id)
        url = server.ping_url or (server.config or {}).get("base_url")

        result = {
            "url": url,
            "reachable": False,
            "status_code": None,
            "latency_ms": None
        }
        if not url:
            return result

        started = time.monotonic()
        try:
            async with httpx.AsyncClient(follow_redirects=True) as client:
                response = await client.get(url, timeout=settings.ping_timeout_seconds)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Ping to {url} for FTP server {server.id} failed: {e}")
            return result

        result["latency_ms"] = round((time.monotonic() - started) * 1000, 1)
        result["status_code"] = response.status_code
        result["reachable"] = response.status_code < 500
        return result
