"""
Comment endpoints
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...core.security import get_current_user
from ...models.user import User
from ...schemas.common import MessageResponse, Pagination
from ...schemas.comment import (
    CommentCreate,
    CommentUpdate,
    CommentResponse,
    CommentEnvelope,
    CommentListResponse
)
from ...services.comment_service import CommentService

router = APIRouter()


@router.post("", response_model=CommentEnvelope, status_code=status.HTTP_201_CREATED)
async def create_comment(
    comment_data: CommentCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    comment = CommentService(db).create_comment(current_user.id, comment_data)
    return CommentEnvelope(
        message="Comment created successfully",
        comment=CommentResponse.model_validate(comment)
    )


@router.get("/content", response_model=CommentListResponse)
async def get_comments_by_content(
    ftp_server_id: int = Query(...),
    content_id: str = Query(..., min_length=1),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    db: Session = Depends(get_db)
):
    """Comments on one content item, newest first. No login required."""
    comments, total = CommentService(db).list_for_content(ftp_server_id, content_id, page, limit)
    return CommentListResponse(
        message="Comments retrieved successfully",
        comments=[CommentResponse.model_validate(comment) for comment in comments],
        pagination=Pagination.build(total, page, limit)
    )


@router.get("/user", response_model=CommentListResponse)
async def get_user_comments(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    comments, total = CommentService(db).list_for_user(current_user.id, page, limit)
    return CommentListResponse(
        message="User comments retrieved successfully",
        comments=[CommentResponse.model_validate(comment) for comment in comments],
        pagination=Pagination.build(total, page, limit)
    )


@router.put("/{comment_id}", response_model=CommentEnvelope)
async def update_comment(
    comment_id: int,
    comment_data: CommentUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    comment = CommentService(db).update_comment(current_user.id, comment_id, comment_data.comment)
    return CommentEnvelope(
        message="Comment updated successfully",
        comment=CommentResponse.model_validate(comment)
    )


@router.delete("/{comment_id}", response_model=MessageResponse)
async def delete_comment(
    comment_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    CommentService(db).delete_comment(current_user.id, comment_id)
    return MessageResponse(message="Comment deleted successfully")
