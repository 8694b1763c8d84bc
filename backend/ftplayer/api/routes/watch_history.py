"""
Watch history endpoints
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...core.security import get_current_user
from ...models.user import User
from ...models.ftp_server import ServerType, ContentType
from ...models.watch_history import WatchStatus
from ...schemas.common import MessageResponse, Pagination
from ...schemas.watch_history import (
    WatchProgressUpdate,
    StatusUpdate,
    EpisodeStatusUpdate,
    EpisodeRef,
    WatchHistoryResponse,
    WatchHistoryEnvelope,
    WatchHistoryListResponse,
    WatchStats,
    WatchStatsResponse
)
from ...services.watch_history_service import WatchHistoryService

router = APIRouter()


@router.post("/progress", response_model=WatchHistoryEnvelope)
async def update_watch_progress(
    progress_data: WatchProgressUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Record progress for a title, or for one episode when season and episode are given"""
    record = WatchHistoryService(db).update_progress(current_user.id, progress_data)
    return WatchHistoryEnvelope(
        message="Watch progress updated successfully",
        watch_history=WatchHistoryResponse.model_validate(record)
    )


@router.put("/status/{record_id}", response_model=WatchHistoryEnvelope)
async def update_content_status(
    record_id: int,
    status_data: StatusUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    record = WatchHistoryService(db).update_status(current_user.id, record_id, status_data.status)
    return WatchHistoryEnvelope(
        message="Content status updated successfully",
        watch_history=WatchHistoryResponse.model_validate(record)
    )


@router.put("/episode-status/{record_id}", response_model=WatchHistoryEnvelope)
async def update_episode_status(
    record_id: int,
    status_data: EpisodeStatusUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    record = WatchHistoryService(db).update_episode_status(
        current_user.id,
        record_id,
        status_data.season_number,
        status_data.episode_number,
        status_data.status
    )
    return WatchHistoryEnvelope(
        message="Episode status updated successfully",
        watch_history=WatchHistoryResponse.model_validate(record)
    )


@router.get("", response_model=WatchHistoryListResponse)
async def get_watch_history(
    status: Optional[WatchStatus] = Query(None),
    content_type: Optional[ContentType] = Query(None),
    server_type: Optional[ServerType] = Query(None),
    ftp_server_id: Optional[int] = Query(None),
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    limit: int = Query(50, ge=1, le=100, description="Items per page"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the current user's watch history, most recently watched first"""
    records, total = WatchHistoryService(db).list_records(
        current_user.id,
        status=status,
        content_type=content_type,
        server_type=server_type,
        ftp_server_id=ftp_server_id,
        page=page,
        limit=limit
    )
    return WatchHistoryListResponse(
        message="Watch history retrieved successfully",
        watch_histories=[WatchHistoryResponse.model_validate(record) for record in records],
        pagination=Pagination.build(total, page, limit)
    )


@router.get("/stats", response_model=WatchStatsResponse)
async def get_watch_stats(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    result = WatchHistoryService(db).get_stats(current_user.id)
    return WatchStatsResponse(
        message="Watch stats retrieved successfully",
        stats=WatchStats(**result["stats"]),
        recently_watched=[WatchHistoryResponse.model_validate(r) for r in result["recently_watched"]]
    )


@router.get("/content", response_model=WatchHistoryEnvelope)
async def get_content_watch_history(
    ftp_server_id: int = Query(...),
    content_id: str = Query(..., min_length=1),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the record for one content item, ``watch_history`` is null when nothing is tracked"""
    record = WatchHistoryService(db).get_for_content(current_user.id, ftp_server_id, content_id)
    if record is None:
        return WatchHistoryEnvelope(message="No watch history found for this content")

    return WatchHistoryEnvelope(
        message="Content watch history retrieved successfully",
        watch_history=WatchHistoryResponse.model_validate(record)
    )


@router.get("/{record_id}", response_model=WatchHistoryEnvelope)
async def get_watch_history_by_id(
    record_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    record = WatchHistoryService(db).get_record(current_user.id, record_id)
    return WatchHistoryEnvelope(
        message="Watch history retrieved successfully",
        watch_history=WatchHistoryResponse.model_validate(record)
    )


@router.delete("/{record_id}/episode", response_model=WatchHistoryEnvelope)
async def delete_episode_from_watch_history(
    record_id: int,
    episode: EpisodeRef,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    record = WatchHistoryService(db).delete_episode(
        current_user.id,
        record_id,
        episode.season_number,
        episode.episode_number
    )
    if record is None:
        return WatchHistoryEnvelope(message="Series watch history deleted (no episodes remaining)")

    return WatchHistoryEnvelope(
        message="Episode deleted successfully",
        watch_history=WatchHistoryResponse.model_validate(record)
    )


@router.delete("/{record_id}", response_model=MessageResponse)
async def delete_watch_history(
    record_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    WatchHistoryService(db).delete_record(current_user.id, record_id)
    return MessageResponse(message="Watch history deleted successfully")
