from pydantic import BaseModel, Field, validator
from typing import Optional, List
from datetime import datetime
from ..models.ftp_server import ServerType, ContentType
from .common import Pagination
from .user import UserSummary


def _clean_comment(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Please provide a valid comment")
    return v


class CommentCreate(BaseModel):
    ftp_server_id: int
    server_type: ServerType
    content_type: ContentType
    content_id: str = Field(..., min_length=1)
    content_title: str = Field(..., min_length=1)
    comment: str

    @validator('content_id', pre=True)
    def coerce_content_id(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @validator('comment')
    def validate_comment(cls, v):
        return _clean_comment(v)


class CommentUpdate(BaseModel):
    comment: str

    @validator('comment')
    def validate_comment(cls, v):
        return _clean_comment(v)


class CommentResponse(BaseModel):
    id: int
    user_id: int
    ftp_server_id: int
    server_type: ServerType
    content_type: ContentType
    content_id: str
    content_title: str
    comment: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user: Optional[UserSummary] = None

    class Config:
        from_attributes = True


class CommentEnvelope(BaseModel):
    message: str
    comment: CommentResponse


class CommentListResponse(BaseModel):
    message: str
    comments: List[CommentResponse]
    pagination: Pagination
