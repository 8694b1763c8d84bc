"""
Watch progress engine

Keeps one record per (user, source, content). Flat content stores a single
progress triple; series keep a season -> episode tree in ``series_progress``.
Updates merge field by field into what is stored instead of replacing it.

The read-modify-write in ``update_progress`` is not guarded: two concurrent
updates of the same record race and the last commit wins.
"""
from copy import deepcopy
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import flag_modified
import logging

from ..core.exceptions import NotFoundError
from ..models.ftp_server import ContentType, ServerType, EPISODIC_CONTENT_TYPES
from ..models.watch_history import WatchHistory, WatchStatus
from ..schemas.watch_history import WatchProgressUpdate

logger = logging.getLogger(__name__)

RECENTLY_WATCHED_LIMIT = 10


def _zero_progress() -> Dict[str, float]:
    return {"current_time": 0, "duration": 0, "percentage": 0}


def merge_progress(existing: Optional[Dict[str, Any]], changes: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Overwrite only the progress fields present in ``changes``"""
    merged = dict(existing) if existing else _zero_progress()
    if changes:
        merged.update({key: value for key, value in changes.items() if value is not None})
    return merged


def find_season(series_progress: List[Dict[str, Any]], season_number: int) -> Optional[Dict[str, Any]]:
    for season in series_progress:
        if season.get("season_number") == season_number:
            return season
    return None


def find_episode(season: Dict[str, Any], episode_number: int) -> Optional[Dict[str, Any]]:
    for episode in season.get("episodes", []):
        if episode.get("episode_number") == episode_number:
            return episode
    return None


def sort_episodes(season: Dict[str, Any]):
    season["episodes"] = sorted(season.get("episodes", []), key=lambda e: e["episode_number"])


def apply_record_status(record: WatchHistory, status: WatchStatus, now: datetime):
    """Set the record status and keep ``completed_at`` consistent with it"""
    record.status = status
    if status == WatchStatus.completed:
        if record.completed_at is None:
            record.completed_at = now
    else:
        record.completed_at = None


class WatchHistoryService:
    def __init__(self, db: Session):
        self.db = db

    # Lookups

    def get_record(self, user_id: int, record_id: int) -> WatchHistory:
        record = self.db.query(WatchHistory).filter(
            WatchHistory.id == record_id,
            WatchHistory.user_id == user_id
        ).first()

        if not record:
            raise NotFoundError("Watch history not found")
        return record

    def get_for_content(self, user_id: int, ftp_server_id: int, content_id: str) -> Optional[WatchHistory]:
        return self.db.query(WatchHistory).filter(
            WatchHistory.user_id == user_id,
            WatchHistory.ftp_server_id == ftp_server_id,
            WatchHistory.content_id == content_id
        ).first()

    def list_records(
        self,
        user_id: int,
        status: Optional[WatchStatus] = None,
        content_type: Optional[ContentType] = None,
        server_type: Optional[ServerType] = None,
        ftp_server_id: Optional[int] = None,
        page: int = 1,
        limit: int = 50
    ) -> Tuple[List[WatchHistory], int]:
        query = self.db.query(WatchHistory).filter(WatchHistory.user_id == user_id)

        if status is not None:
            query = query.filter(WatchHistory.status == status)
        if content_type is not None:
            query = query.filter(WatchHistory.content_type == content_type)
        if server_type is not None:
            query = query.filter(WatchHistory.server_type == server_type)
        if ftp_server_id is not None:
            query = query.filter(WatchHistory.ftp_server_id == ftp_server_id)

        total = query.count()
        records = query.order_by(
            WatchHistory.last_watched_at.desc(),
            WatchHistory.id.desc()
        ).offset((page - 1) * limit).limit(limit).all()

        return records, total

    # Progress

    def update_progress(self, user_id: int, update: WatchProgressUpdate) -> WatchHistory:
        now = datetime.utcnow()
        progress_changes = update.progress.model_dump(exclude_none=True) if update.progress else None

        record = self.get_for_content(user_id, update.ftp_server_id, update.content_id)
        if record is None:
            record = WatchHistory(
                user_id=user_id,
                ftp_server_id=update.ftp_server_id,
                server_type=update.server_type,
                content_type=update.content_type,
                content_id=update.content_id,
                content_title=update.content_title or "Untitled",
                status=WatchStatus.watching,
                series_progress=[],
                last_watched_at=now
            )
            self.db.add(record)

        is_episode_update = (
            update.content_type in EPISODIC_CONTENT_TYPES
            and update.season_number is not None
            and update.episode_number is not None
        )

        if is_episode_update:
            self._merge_episode(record, update, progress_changes, now)
            # The series counts as being watched again once any episode is
            if update.status == WatchStatus.watching:
                apply_record_status(record, WatchStatus.watching, now)
        else:
            if update.status is not None:
                apply_record_status(record, update.status, now)
            if progress_changes:
                record.progress = merge_progress(record.progress, progress_changes)
                flag_modified(record, "progress")

        record.last_watched_at = now

        if update.metadata:
            record.watch_metadata = {**(record.watch_metadata or {}), **update.metadata}
            flag_modified(record, "watch_metadata")

        self.db.commit()
        self.db.refresh(record)
        return record

    def _merge_episode(
        self,
        record: WatchHistory,
        update: WatchProgressUpdate,
        progress_changes: Optional[Dict[str, Any]],
        now: datetime
    ):
        series_progress = deepcopy(record.series_progress or [])

        season = find_season(series_progress, update.season_number)
        if season is None:
            season = {"season_number": update.season_number, "season_id": update.season_id, "episodes": []}
            series_progress.append(season)
        elif update.season_id:
            season["season_id"] = update.season_id

        episode = find_episode(season, update.episode_number)
        if episode is None:
            season["episodes"].append({
                "episode_number": update.episode_number,
                "episode_id": update.episode_id,
                "episode_title": update.episode_title,
                "status": (update.status or WatchStatus.watching).value,
                "progress": merge_progress(None, progress_changes),
                "last_watched_at": now.isoformat()
            })
        else:
            if update.status is not None:
                episode["status"] = update.status.value
            if progress_changes:
                episode["progress"] = merge_progress(episode.get("progress"), progress_changes)
            if update.episode_title:
                episode["episode_title"] = update.episode_title
            if update.episode_id:
                episode["episode_id"] = update.episode_id
            episode["last_watched_at"] = now.isoformat()

        sort_episodes(season)

        record.series_progress = series_progress
        flag_modified(record, "series_progress")

    # Status

    def update_status(self, user_id: int, record_id: int, status: WatchStatus) -> WatchHistory:
        record = self.get_record(user_id, record_id)
        now = datetime.utcnow()

        apply_record_status(record, status, now)
        record.last_watched_at = now

        self.db.commit()
        self.db.refresh(record)
        return record

    def update_episode_status(
        self,
        user_id: int,
        record_id: int,
        season_number: int,
        episode_number: int,
        status: WatchStatus
    ) -> WatchHistory:
        """Episode level status, the record's own status and completed_at stay as they are"""
        record = self.get_record(user_id, record_id)
        series_progress = deepcopy(record.series_progress or [])

        season = find_season(series_progress, season_number)
        if season is None:
            raise NotFoundError("Season not found")

        episode = find_episode(season, episode_number)
        if episode is None:
            raise NotFoundError("Episode not found")

        now = datetime.utcnow()
        episode["status"] = status.value
        episode["last_watched_at"] = now.isoformat()
        record.series_progress = series_progress
        flag_modified(record, "series_progress")
        record.last_watched_at = now

        self.db.commit()
        self.db.refresh(record)
        return record

    # Deletion

    def delete_record(self, user_id: int, record_id: int):
        record = self.get_record(user_id, record_id)
        self.db.delete(record)
        self.db.commit()

    def delete_episode(
        self,
        user_id: int,
        record_id: int,
        season_number: int,
        episode_number: int
    ) -> Optional[WatchHistory]:
        """Remove one episode.

        Emptied seasons are dropped, and once no season is left the whole
        record is deleted; ``None`` is returned in that case.
        """
        record = self.get_record(user_id, record_id)
        if not record.series_progress:
            raise NotFoundError("No series progress found")

        series_progress = deepcopy(record.series_progress)
        season = find_season(series_progress, season_number)
        if season is None:
            raise NotFoundError("Season not found")

        episode = find_episode(season, episode_number)
        if episode is None:
            raise NotFoundError("Episode not found")

        season["episodes"].remove(episode)
        if not season["episodes"]:
            series_progress.remove(season)

        if not series_progress:
            self.db.delete(record)
            self.db.commit()
            logger.info(f"Deleted watch history {record_id} of user {user_id}, no episodes remaining")
            return None

        record.series_progress = series_progress
        flag_modified(record, "series_progress")
        self.db.commit()
        self.db.refresh(record)
        return record

    # Stats

    def get_stats(self, user_id: int) -> Dict[str, Any]:
        by_status = self.db.query(
            WatchHistory.status,
            func.count(WatchHistory.id)
        ).filter(
            WatchHistory.user_id == user_id
        ).group_by(WatchHistory.status).all()

        by_content_type = self.db.query(
            WatchHistory.content_type,
            func.count(WatchHistory.id)
        ).filter(
            WatchHistory.user_id == user_id
        ).group_by(WatchHistory.content_type).all()

        # Only flat progress counts here, episode progress inside
        # series_progress is left out of the total
        flat_progress = self.db.query(WatchHistory.progress).filter(
            WatchHistory.user_id == user_id
        ).all()
        total_watch_time = sum(
            (progress or {}).get("current_time") or 0
            for (progress,) in flat_progress
        )

        recently_watched = self.db.query(WatchHistory).filter(
            WatchHistory.user_id == user_id
        ).order_by(
            WatchHistory.last_watched_at.desc(),
            WatchHistory.id.desc()
        ).limit(RECENTLY_WATCHED_LIMIT).all()

        return {
            "stats": {
                "by_status": {status.value: count for status, count in by_status},
                "by_content_type": {content_type.value: count for content_type, count in by_content_type},
                "total_watch_time": total_watch_time
            },
            "recently_watched": recently_watched
        }
