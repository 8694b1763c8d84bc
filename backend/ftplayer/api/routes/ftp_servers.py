"""
FTP server (content source) endpoints
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...core.security import get_current_user
from ...models.user import User
from ...models.ftp_server import ServerType
from ...providers import registry
from ...providers.base import ImageKind
from ...schemas.common import MessageResponse
from ...schemas.ftp_server import (
    FtpServerCreate,
    FtpServerUpdate,
    FtpServerResponse,
    FtpServerEnvelope,
    FtpServerListResponse,
    ServerTypeInfo,
    ServerTypeListResponse,
    PingResponse,
    ImageUrlResponse
)
from ...services.ftp_server_service import FtpServerService

router = APIRouter()


@router.get("/types", response_model=ServerTypeListResponse)
async def get_server_types(
    current_user: User = Depends(get_current_user)
):
    """List the supported server types and what each can do"""
    return ServerTypeListResponse(
        message="Server types retrieved successfully",
        server_types=[ServerTypeInfo(**info) for info in registry.list_server_types()]
    )


@router.post("", response_model=FtpServerEnvelope, status_code=status.HTTP_201_CREATED)
async def create_ftp_server(
    server_data: FtpServerCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    server = FtpServerService(db).create_server(current_user.id, server_data)
    return FtpServerEnvelope(
        message="FTP server created successfully",
        server=FtpServerResponse.model_validate(server)
    )


@router.get("", response_model=FtpServerListResponse)
async def list_ftp_servers(
    is_active: Optional[bool] = Query(None, description="Filter by active flag"),
    server_type: Optional[ServerType] = Query(None, description="Filter by server type"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the current user's servers, highest priority first"""
    servers = FtpServerService(db).list_servers(current_user.id, is_active, server_type)
    return FtpServerListResponse(
        message="FTP servers retrieved successfully",
        servers=[FtpServerResponse.model_validate(server) for server in servers]
    )


@router.get("/all-public", response_model=FtpServerListResponse)
async def list_public_ftp_servers(
    server_type: Optional[ServerType] = Query(None, description="Filter by server type"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List active servers of all users"""
    servers = FtpServerService(db).list_public_servers(server_type)
    return FtpServerListResponse(
        message="FTP servers retrieved successfully",
        servers=[FtpServerResponse.model_validate(server) for server in servers]
    )


@router.get("/{server_id}", response_model=FtpServerEnvelope)
async def get_ftp_server(
    server_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    server = FtpServerService(db).get_server(current_user.id, server_id)
    return FtpServerEnvelope(
        message="FTP server retrieved successfully",
        server=FtpServerResponse.model_validate(server)
    )


@router.put("/{server_id}", response_model=FtpServerEnvelope)
async def update_ftp_server(
    server_id: int,
    server_data: FtpServerUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    server = FtpServerService(db).update_server(current_user.id, server_id, server_data)
    return FtpServerEnvelope(
        message="FTP server updated successfully",
        server=FtpServerResponse.model_validate(server)
    )


@router.delete("/{server_id}", response_model=MessageResponse)
async def delete_ftp_server(
    server_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    FtpServerService(db).delete_server(current_user.id, server_id)
    return MessageResponse(message="FTP server deleted successfully")


@router.post("/{server_id}/ping", response_model=PingResponse)
async def ping_ftp_server(
    server_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Check whether the server answers on its ping URL"""
    result = await FtpServerService(db).ping_server(current_user.id, server_id)
    message = "FTP server is reachable" if result["reachable"] else "FTP server is unreachable"
    return PingResponse(message=message, **result)


@router.get("/{server_id}/image-url", response_model=ImageUrlResponse)
async def get_image_url(
    server_id: int,
    image_path: str = Query(..., description="Image path, file name or tag as returned by the provider"),
    image_kind: ImageKind = Query(ImageKind.poster),
    content_id: Optional[str] = Query(None, description="Provider content id, required by some server types"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    url = FtpServerService(db).build_image_url(
        current_user.id, server_id, image_path, image_kind, content_id
    )
    return ImageUrlResponse(message="Image URL built successfully", url=url)
