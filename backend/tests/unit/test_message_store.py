"""Unit tests for MessageStore dedup and ordering"""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from talkdigest.domain.analysis import AggregatedAnalysis
from talkdigest.domain.errors import MessageNotFoundError
from talkdigest.domain.messages import Message, MessageStore
from talkdigest.domain.summaries import SummaryResult

BASE_TIME = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


def make_message(message_id: int, hours: int = 0, subject: str = None) -> Message:
    return Message(
        id=message_id,
        subject=subject or f"Message {message_id}",
        sender="sender@club.example",
        received_at=BASE_TIME + timedelta(hours=hours),
    )


class TestMerge:

    @pytest.mark.asyncio
    async def test_merge_inserts_new_messages(self):
        store = MessageStore()

        inserted = await store.merge([make_message(1), make_message(2, hours=1)])

        assert [m.id for m in inserted] == [1, 2]
        assert len(store) == 2
        assert 1 in store and 2 in store

    @pytest.mark.asyncio
    async def test_store_sorted_newest_first(self):
        store = MessageStore()

        await store.merge([make_message(1, hours=0), make_message(2, hours=5)])
        await store.merge([make_message(3, hours=2)])

        assert [m.id for m in store.list()] == [2, 3, 1]

    @pytest.mark.asyncio
    async def test_duplicate_id_is_discarded_not_merged(self):
        store = MessageStore()
        await store.merge([make_message(7, subject="original")])

        inserted = await store.merge([make_message(7, hours=3, subject="replacement")])

        assert inserted == []
        assert len(store) == 1
        assert store.get(7).subject == "original"

    @pytest.mark.asyncio
    async def test_duplicate_within_one_batch(self):
        store = MessageStore()

        inserted = await store.merge([make_message(1, subject="first"), make_message(1, subject="second")])

        assert len(inserted) == 1
        assert store.get(1).subject == "first"

    @pytest.mark.asyncio
    async def test_concurrent_merges_do_not_duplicate(self):
        store = MessageStore()
        batch = [make_message(i, hours=i) for i in range(1, 6)]

        results = await asyncio.gather(store.merge(batch), store.merge(list(batch)))

        assert sum(len(r) for r in results) == 5
        assert len(store) == 5
        assert [m.id for m in store.list()] == [5, 4, 3, 2, 1]

    @pytest.mark.asyncio
    async def test_list_returns_copy(self):
        store = MessageStore()
        await store.merge([make_message(1)])

        listing = store.list()
        listing.clear()

        assert len(store) == 1


class TestMarkProcessed:

    @pytest.mark.asyncio
    async def test_mark_processed_writes_all_fields(self):
        store = MessageStore()
        await store.merge([make_message(1)])
        summaries = SummaryResult(long_summary="long", short_summary="short")
        analysis = AggregatedAnalysis()

        message = await store.mark_processed(1, summaries, analysis, BASE_TIME)

        assert message.processed is True
        assert message.summaries is summaries
        assert message.attachment_analysis is analysis
        assert message.processed_at == BASE_TIME

    @pytest.mark.asyncio
    async def test_mark_processed_unknown_id(self):
        store = MessageStore()

        with pytest.raises(MessageNotFoundError, match="Message 99 not found"):
            await store.mark_processed(
                99, SummaryResult(long_summary="", short_summary=""), AggregatedAnalysis(), BASE_TIME
            )
