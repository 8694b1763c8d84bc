from pydantic import BaseModel
from typing import List
from .ftp_server import FtpServerResponse


class WorkingFtpServerRef(BaseModel):
    ftp_server_id: int


class WorkingFtpServerReplace(BaseModel):
    ftp_server_ids: List[int]


class WorkingFtpServerListResponse(BaseModel):
    message: str
    working_ftp_servers: List[FtpServerResponse]
