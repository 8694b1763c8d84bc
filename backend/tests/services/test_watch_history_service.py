"""
Tests for the watch progress engine
"""
import pytest

from ftplayer.core.exceptions import NotFoundError
from ftplayer.models.ftp_server import ServerType, ContentType
from ftplayer.models.watch_history import WatchHistory, WatchStatus
from ftplayer.schemas.watch_history import WatchProgressUpdate
from ftplayer.services.watch_history_service import (
    WatchHistoryService,
    merge_progress,
    find_season,
    sort_episodes
)


@pytest.fixture
def service(db):
    return WatchHistoryService(db)


def movie_update(server, **fields):
    data = {
        "ftp_server_id": server.id,
        "server_type": "dflix",
        "content_type": "movie",
        "content_id": "m1",
        "content_title": "Movie One",
    }
    data.update(fields)
    return WatchProgressUpdate(**data)


def episode_update(server, season, episode, **fields):
    data = {
        "ftp_server_id": server.id,
        "server_type": "circleftp",
        "content_type": "series",
        "content_id": "s1",
        "content_title": "Show One",
        "season_number": season,
        "episode_number": episode,
    }
    data.update(fields)
    return WatchProgressUpdate(**data)


class TestHelpers:
    """Pure merge helpers"""

    def test_merge_progress_keeps_unsent_fields(self):
        merged = merge_progress(
            {"current_time": 10, "duration": 100, "percentage": 10},
            {"current_time": 50}
        )
        assert merged == {"current_time": 50, "duration": 100, "percentage": 10}

    def test_merge_progress_from_nothing(self):
        assert merge_progress(None, {"duration": 60}) == {"current_time": 0, "duration": 60, "percentage": 0}

    def test_merge_progress_does_not_mutate_input(self):
        existing = {"current_time": 1, "duration": 2, "percentage": 3}
        merge_progress(existing, {"current_time": 9})
        assert existing["current_time"] == 1

    def test_find_season_and_sort(self):
        season = {"season_number": 2, "episodes": [{"episode_number": 3}, {"episode_number": 1}]}
        assert find_season([season], 2) is season
        assert find_season([season], 1) is None

        sort_episodes(season)
        assert [e["episode_number"] for e in season["episodes"]] == [1, 3]


class TestFlatProgress:
    """Content without episodes"""

    def test_first_update_creates_record(self, service, user, server):
        record = service.update_progress(
            user.id,
            movie_update(server, progress={"current_time": 30, "duration": 600, "percentage": 5})
        )

        assert record.id is not None
        assert record.status == WatchStatus.watching
        assert record.progress == {"current_time": 30, "duration": 600, "percentage": 5}
        assert record.series_progress == []
        assert record.last_watched_at is not None

    def test_partial_update_merges(self, service, user, server):
        service.update_progress(
            user.id,
            movie_update(server, progress={"current_time": 30, "duration": 600, "percentage": 5})
        )
        record = service.update_progress(user.id, movie_update(server, progress={"current_time": 120}))

        assert record.progress == {"current_time": 120, "duration": 600, "percentage": 5}

    def test_single_record_per_content(self, service, user, server, db):
        service.update_progress(user.id, movie_update(server))
        service.update_progress(user.id, movie_update(server, content_id=1))
        service.update_progress(user.id, movie_update(server, content_id="m1"))

        assert db.query(WatchHistory).count() == 2

    def test_missing_title_defaults(self, service, user, server):
        record = service.update_progress(user.id, movie_update(server, content_title=None))
        assert record.content_title == "Untitled"

    def test_completed_sets_completed_at_once(self, service, user, server):
        first = service.update_progress(user.id, movie_update(server, status="completed"))
        completed_at = first.completed_at
        assert completed_at is not None

        again = service.update_progress(user.id, movie_update(server, status="completed"))
        assert again.completed_at == completed_at

    def test_leaving_completed_clears_completed_at(self, service, user, server):
        service.update_progress(user.id, movie_update(server, status="completed"))
        record = service.update_progress(user.id, movie_update(server, status="on_hold"))

        assert record.status == WatchStatus.on_hold
        assert record.completed_at is None

    def test_metadata_is_shallow_merged(self, service, user, server):
        service.update_progress(user.id, movie_update(server, metadata={"year": 2020, "poster": "a.jpg"}))
        record = service.update_progress(user.id, movie_update(server, metadata={"poster": "b.jpg"}))

        assert record.watch_metadata == {"year": 2020, "poster": "b.jpg"}


class TestEpisodeProgress:
    """Series with a season/episode tree"""

    def test_episodes_are_merged_into_tree(self, service, user, server):
        service.update_progress(user.id, episode_update(server, 1, 2, progress={"current_time": 10}))
        service.update_progress(user.id, episode_update(server, 1, 1, episode_title="Pilot"))
        record = service.update_progress(user.id, episode_update(server, 2, 1))

        assert [s["season_number"] for s in record.series_progress] == [1, 2]
        season_one = record.series_progress[0]
        assert [e["episode_number"] for e in season_one["episodes"]] == [1, 2]
        assert season_one["episodes"][0]["episode_title"] == "Pilot"
        assert season_one["episodes"][1]["progress"] == {"current_time": 10, "duration": 0, "percentage": 0}
        assert record.progress is None

    def test_episode_order_does_not_depend_on_arrival(self, service, user, server):
        for episode in (3, 1, 2):
            record = service.update_progress(user.id, episode_update(server, 1, episode))

        assert [e["episode_number"] for e in record.series_progress[0]["episodes"]] == [1, 2, 3]

    def test_partial_episode_update_keeps_other_fields(self, service, user, server):
        service.update_progress(
            user.id,
            episode_update(server, 1, 1, progress={"current_time": 10, "duration": 1200, "percentage": 1})
        )
        record = service.update_progress(user.id, episode_update(server, 1, 1, progress={"current_time": 120}))

        progress = record.series_progress[0]["episodes"][0]["progress"]
        assert progress == {"current_time": 120, "duration": 1200, "percentage": 1}

    def test_existing_episode_is_updated_in_place(self, service, user, server):
        service.update_progress(
            user.id,
            episode_update(server, 1, 1, progress={"current_time": 10, "duration": 1200, "percentage": 1})
        )
        record = service.update_progress(
            user.id,
            episode_update(server, 1, 1, status="completed", progress={"percentage": 100})
        )

        episodes = record.series_progress[0]["episodes"]
        assert len(episodes) == 1
        assert episodes[0]["status"] == "completed"
        assert episodes[0]["progress"] == {"current_time": 10, "duration": 1200, "percentage": 100}

    def test_episode_completion_leaves_record_status(self, service, user, server):
        record = service.update_progress(user.id, episode_update(server, 1, 1, status="completed"))

        assert record.status == WatchStatus.watching
        assert record.completed_at is None

    def test_watching_episode_reopens_completed_series(self, service, user, server):
        record = service.update_progress(user.id, episode_update(server, 1, 1))
        service.update_status(user.id, record.id, WatchStatus.completed)

        record = service.update_progress(user.id, episode_update(server, 1, 2, status="watching"))

        assert record.status == WatchStatus.watching
        assert record.completed_at is None

    def test_episode_fields_without_numbers_update_flat_progress(self, service, user, server):
        record = service.update_progress(
            user.id,
            episode_update(server, None, None, progress={"current_time": 5})
        )

        assert record.series_progress == []
        assert record.progress["current_time"] == 5

    def test_movie_with_episode_numbers_stays_flat(self, service, user, server):
        record = service.update_progress(
            user.id,
            movie_update(server, season_number=1, episode_number=1, progress={"current_time": 7})
        )

        assert record.series_progress == []
        assert record.progress["current_time"] == 7


class TestStatusUpdates:

    def test_update_status(self, service, user, server):
        record = service.update_progress(user.id, movie_update(server))

        updated = service.update_status(user.id, record.id, WatchStatus.completed)
        assert updated.status == WatchStatus.completed
        assert updated.completed_at is not None

        updated = service.update_status(user.id, record.id, WatchStatus.dropped)
        assert updated.completed_at is None

    def test_watching_after_completed_clears_completed_at(self, service, user, server):
        record = service.update_progress(user.id, movie_update(server, status="completed"))

        updated = service.update_status(user.id, record.id, WatchStatus.watching)
        assert updated.completed_at is None

    def test_update_status_other_users_record(self, service, user, other_user, server):
        record = service.update_progress(user.id, movie_update(server))

        with pytest.raises(NotFoundError):
            service.update_status(other_user.id, record.id, WatchStatus.completed)

    def test_update_episode_status(self, service, user, server):
        record = service.update_progress(user.id, episode_update(server, 1, 1))

        updated = service.update_episode_status(user.id, record.id, 1, 1, WatchStatus.completed)

        assert updated.series_progress[0]["episodes"][0]["status"] == "completed"
        assert updated.status == WatchStatus.watching

    def test_update_episode_status_missing_season(self, service, user, server):
        record = service.update_progress(user.id, episode_update(server, 1, 1))

        with pytest.raises(NotFoundError) as exc_info:
            service.update_episode_status(user.id, record.id, 3, 1, WatchStatus.completed)
        assert exc_info.value.message == "Season not found"

    def test_update_episode_status_missing_episode(self, service, user, server):
        record = service.update_progress(user.id, episode_update(server, 1, 1))

        with pytest.raises(NotFoundError) as exc_info:
            service.update_episode_status(user.id, record.id, 1, 9, WatchStatus.completed)
        assert exc_info.value.message == "Episode not found"


class TestDeletion:

    def test_delete_episode_keeps_other_episodes(self, service, user, server):
        service.update_progress(user.id, episode_update(server, 1, 1))
        record = service.update_progress(user.id, episode_update(server, 1, 2))

        record = service.delete_episode(user.id, record.id, 1, 1)

        assert [e["episode_number"] for e in record.series_progress[0]["episodes"]] == [2]

    def test_delete_last_episode_of_season_drops_season(self, service, user, server):
        service.update_progress(user.id, episode_update(server, 1, 1))
        record = service.update_progress(user.id, episode_update(server, 2, 1))

        record = service.delete_episode(user.id, record.id, 1, 1)

        assert [s["season_number"] for s in record.series_progress] == [2]

    def test_delete_last_episode_deletes_record(self, service, user, server, db):
        record = service.update_progress(user.id, episode_update(server, 1, 1))

        assert service.delete_episode(user.id, record.id, 1, 1) is None
        assert db.query(WatchHistory).count() == 0

    def test_delete_episode_without_series_progress(self, service, user, server):
        record = service.update_progress(user.id, movie_update(server))

        with pytest.raises(NotFoundError) as exc_info:
            service.delete_episode(user.id, record.id, 1, 1)
        assert exc_info.value.message == "No series progress found"

    def test_delete_record(self, service, user, server, db):
        record = service.update_progress(user.id, movie_update(server))
        service.delete_record(user.id, record.id)

        assert db.query(WatchHistory).count() == 0
        with pytest.raises(NotFoundError):
            service.get_record(user.id, record.id)


class TestListingAndStats:

    def test_list_filters_and_paginates(self, service, user, server):
        for index in range(3):
            service.update_progress(user.id, movie_update(server, content_id=f"m{index}"))
        service.update_progress(user.id, episode_update(server, 1, 1))

        records, total = service.list_records(user.id, content_type=ContentType.movie, page=1, limit=2)
        assert total == 3
        assert len(records) == 2

        records, total = service.list_records(user.id, server_type=ServerType.circle_ftp)
        assert total == 1
        assert records[0].content_id == "s1"

    def test_list_is_most_recent_first(self, service, user, server):
        service.update_progress(user.id, movie_update(server, content_id="old"))
        service.update_progress(user.id, movie_update(server, content_id="new"))

        records, _ = service.list_records(user.id)
        assert [r.content_id for r in records] == ["new", "old"]

    def test_list_is_user_scoped(self, service, user, other_user, server):
        service.update_progress(user.id, movie_update(server))

        records, total = service.list_records(other_user.id)
        assert total == 0
        assert records == []

    def test_stats(self, service, user, server):
        service.update_progress(user.id, movie_update(server, content_id="a", progress={"current_time": 100}))
        service.update_progress(
            user.id,
            movie_update(server, content_id="b", status="completed", progress={"current_time": 50})
        )
        service.update_progress(user.id, episode_update(server, 1, 1, progress={"current_time": 999}))

        result = service.get_stats(user.id)

        assert result["stats"]["by_status"] == {"watching": 2, "completed": 1}
        assert result["stats"]["by_content_type"] == {"movie": 2, "series": 1}
        # Episode progress is not part of the total
        assert result["stats"]["total_watch_time"] == 150
        assert len(result["recently_watched"]) == 3
