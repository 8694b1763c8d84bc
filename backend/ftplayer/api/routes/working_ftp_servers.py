from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...core.security import get_current_user
from ...models.user import User
from ...schemas.ftp_server import FtpServerResponse
from ...schemas.working_ftp_server import (
    WorkingFtpServerRef,
    WorkingFtpServerReplace,
    WorkingFtpServerListResponse
)
from ...services.working_ftp_server_service import WorkingFtpServerService

router = APIRouter()


def _list_response(message: str, servers) -> WorkingFtpServerListResponse:
    return WorkingFtpServerListResponse(
        message=message,
        working_ftp_servers=[FtpServerResponse.model_validate(server) for server in servers]
    )


@router.get("", response_model=WorkingFtpServerListResponse)
async def get_working_ftp_servers(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    servers = WorkingFtpServerService(db).list_servers(current_user.id)
    return _list_response("Working FTP servers retrieved successfully", servers)


@router.post("/add", response_model=WorkingFtpServerListResponse)
async def add_working_ftp_server(
    data: WorkingFtpServerRef,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    servers = WorkingFtpServerService(db).add_server(current_user.id, data.ftp_server_id)
    return _list_response("FTP server added to working list successfully", servers)


@router.post("/remove", response_model=WorkingFtpServerListResponse)
async def remove_working_ftp_server(
    data: WorkingFtpServerRef,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    servers = WorkingFtpServerService(db).remove_server(current_user.id, data.ftp_server_id)
    return _list_response("FTP server removed from working list successfully", servers)


@router.put("", response_model=WorkingFtpServerListResponse)
async def update_working_ftp_servers(
    data: WorkingFtpServerReplace,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Replace the working list, keeping the order given"""
    servers = WorkingFtpServerService(db).replace_servers(current_user.id, data.ftp_server_ids)
    return _list_response("Working FTP servers updated successfully", servers)


@router.delete("", response_model=WorkingFtpServerListResponse)
async def clear_working_ftp_servers(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    WorkingFtpServerService(db).clear_servers(current_user.id)
    return _list_response("Working FTP servers cleared successfully", [])
