"""Unit tests for the MongoDB repositories (query shapes against a mocked Motor)."""

import pytest
from datetime import datetime, timezone, timedelta
from unittest.mock import MagicMock
from bson import ObjectId

from serenspace.repositories.base import to_object_id
from serenspace.repositories.mood_repository import MongoMoodRepository
from serenspace.repositories.insight_repository import MongoInsightRepository
from serenspace.repositories.profile_repository import MongoProfileRepository


def test_to_object_id():
    oid = ObjectId()
    assert to_object_id(str(oid)) == oid
    assert to_object_id("not-an-id") is None
    assert to_object_id(None) is None


class TestMongoMoodRepository:
    @pytest.mark.asyncio
    async def test_create(self, mock_db, mock_collection, sample_user_id):
        new_id = ObjectId()
        mock_collection.insert_one.return_value = MagicMock(inserted_id=new_id)
        repo = MongoMoodRepository(mock_db)

        mood = await repo.create(sample_user_id, 7, "happy", note="ok", tags=["work"])

        doc = mock_collection.insert_one.call_args[0][0]
        assert doc["userId"] == sample_user_id
        assert doc["score"] == 7
        assert doc["tags"] == ["work"]
        assert mood["id"] == str(new_id)
        assert mood["emotion"] == "happy"

    @pytest.mark.asyncio
    async def test_get_owned_filters_by_owner(self, mock_db, mock_collection, sample_mood_doc, sample_user_id):
        mock_collection.find_one.return_value = sample_mood_doc
        repo = MongoMoodRepository(mock_db)

        mood = await repo.get_owned(str(sample_mood_doc["_id"]), sample_user_id)

        mock_collection.find_one.assert_called_once_with(
            {"_id": sample_mood_doc["_id"], "userId": sample_user_id}
        )
        assert mood["id"] == str(sample_mood_doc["_id"])
        assert mood["note"] == "Walked by the river"

    @pytest.mark.asyncio
    async def test_get_owned_invalid_id(self, mock_db, mock_collection, sample_user_id):
        repo = MongoMoodRepository(mock_db)

        assert await repo.get_owned("garbage", sample_user_id) is None
        mock_collection.find_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_list_since(self, mock_db, mock_collection, mock_cursor, sample_mood_doc, sample_user_id):
        mock_cursor.to_list.return_value = [sample_mood_doc]
        mock_collection.find.return_value = mock_cursor
        repo = MongoMoodRepository(mock_db)
        since = datetime.now(timezone.utc) - timedelta(days=30)

        moods = await repo.list_since(sample_user_id, since)

        mock_collection.find.assert_called_once_with({
            "userId": sample_user_id,
            "createdAt": {"$gte": since},
        })
        mock_cursor.sort.assert_called_once_with("createdAt", -1)
        assert len(moods) == 1

    @pytest.mark.asyncio
    async def test_list_recent_limits(self, mock_db, mock_collection, mock_cursor, sample_user_id):
        mock_collection.find.return_value = mock_cursor
        repo = MongoMoodRepository(mock_db)

        await repo.list_recent(sample_user_id, 50)

        mock_cursor.limit.assert_called_once_with(50)

    @pytest.mark.asyncio
    async def test_update_owned_not_found(self, mock_db, mock_collection, sample_user_id):
        mock_collection.find_one_and_update.return_value = None
        repo = MongoMoodRepository(mock_db)

        result = await repo.update_owned(str(ObjectId()), sample_user_id, {"score": 3})

        assert result is None
        filter_doc = mock_collection.find_one_and_update.call_args[0][0]
        assert filter_doc["userId"] == sample_user_id

    @pytest.mark.asyncio
    async def test_delete_owned(self, mock_db, mock_collection, sample_user_id):
        mock_collection.delete_one.return_value = MagicMock(deleted_count=1)
        repo = MongoMoodRepository(mock_db)

        assert await repo.delete_owned(str(ObjectId()), sample_user_id) is True


class TestMongoInsightRepository:
    @pytest.mark.asyncio
    async def test_delete_all_for_user(self, mock_db, mock_collection, sample_user_id):
        mock_collection.delete_many.return_value = MagicMock(deleted_count=3)
        repo = MongoInsightRepository(mock_db)

        assert await repo.delete_all_for_user(sample_user_id) == 3
        mock_collection.delete_many.assert_called_once_with({"userId": sample_user_id})

    @pytest.mark.asyncio
    async def test_mark_read_checks_owner(self, mock_db, mock_collection, sample_user_id):
        mock_collection.update_one.return_value = MagicMock(matched_count=0)
        repo = MongoInsightRepository(mock_db)
        insight_id = ObjectId()

        assert await repo.mark_read(str(insight_id), sample_user_id) is False

        filter_doc, update_doc = mock_collection.update_one.call_args[0]
        assert filter_doc == {"_id": insight_id, "userId": sample_user_id}
        assert update_doc["$set"]["isRead"] is True


class TestMongoProfileRepository:
    @pytest.mark.asyncio
    async def test_ensure_only_sets_on_insert(self, mock_db, mock_collection, sample_user_id):
        mock_collection.update_one.return_value = MagicMock(upserted_id=None)
        repo = MongoProfileRepository(mock_db)

        await repo.ensure(sample_user_id, display_name="Alice")

        args, kwargs = mock_collection.update_one.call_args
        assert args[0] == {"_id": sample_user_id}
        assert set(args[1].keys()) == {"$setOnInsert"}
        assert args[1]["$setOnInsert"]["lastCheckIn"] is None
        assert kwargs["upsert"] is True

    @pytest.mark.asyncio
    async def test_compare_and_set(self, mock_db, mock_collection, sample_user_id):
        mock_collection.update_one.return_value = MagicMock(modified_count=1)
        repo = MongoProfileRepository(mock_db)
        last = datetime(2026, 3, 9, tzinfo=timezone.utc)
        now = datetime(2026, 3, 10, tzinfo=timezone.utc)

        applied = await repo.compare_and_set_check_in(
            sample_user_id, expected_last_check_in=last, streak_days=4, now=now
        )

        assert applied is True
        filter_doc, update_doc = mock_collection.update_one.call_args[0]
        assert filter_doc == {"_id": sample_user_id, "lastCheckIn": last}
        assert update_doc["$set"]["streakDays"] == 4
        assert update_doc["$set"]["lastCheckIn"] == now
        assert "$inc" not in update_doc

    @pytest.mark.asyncio
    async def test_increment_check_ins_is_unconditional(self, mock_db, mock_collection, sample_user_id):
        repo = MongoProfileRepository(mock_db)

        await repo.increment_check_ins(sample_user_id)

        mock_collection.update_one.assert_awaited_once_with(
            {"_id": sample_user_id},
            {"$inc": {"totalCheckIns": 1}},
        )

    @pytest.mark.asyncio
    async def test_get_formats_profile(self, mock_db, mock_collection, sample_user_id):
        mock_collection.find_one.return_value = {"_id": sample_user_id, "streakDays": 2}
        repo = MongoProfileRepository(mock_db)

        profile = await repo.get(sample_user_id)

        assert profile["uid"] == sample_user_id
        assert profile["streakDays"] == 2
        assert profile["totalCheckIns"] == 0
