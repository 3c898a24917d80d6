"""Tests for the local chat store."""

import pytest

from core.services import ChatService


@pytest.fixture
def chat(cache):
    return ChatService(cache=cache)


@pytest.mark.asyncio
async def test_first_read_seeds_welcome_messages(chat, cached):
    messages = await chat.get_messages("viewer-1")

    assert [m.sender_name for m in messages] == ["Admin", "Coach Johnson"]
    assert messages[0].is_admin
    assert all(m.read_by_ids == ["viewer-1"] for m in messages)
    assert len(cached("local_chat_messages")) == 2


@pytest.mark.asyncio
async def test_sent_message_is_listed_last(chat):
    await chat.get_messages("viewer-1")

    sent = await chat.send_message("viewer-1", "Peter", "  Training moved to 18:00  ")
    messages = await chat.get_messages("viewer-1")

    assert sent.message == "Training moved to 18:00"
    assert messages[-1].id == sent.id
    assert len(messages) == 3


@pytest.mark.asyncio
async def test_blank_message_is_ignored(chat, store):
    assert await chat.send_message("viewer-1", "Peter", "   ") is None
    assert store.snapshot() == {}


@pytest.mark.asyncio
async def test_unread_counter(chat):
    assert await chat.get_unread_count() == 0
    assert await chat.increment_unread_count() == 1
    assert await chat.increment_unread_count() == 2

    await chat.reset_unread_count()
    assert await chat.get_unread_count() == 0


@pytest.mark.asyncio
async def test_unread_counter_ignores_garbage(chat, store):
    await store.set("unread_help_count", "lots")
    assert await chat.get_unread_count() == 0
