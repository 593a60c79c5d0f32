"""Test several records pointing at one referenced record."""

import pytest


@pytest.mark.asyncio
async def test_single_channel_linked_to_many_users(seeder, writer):
    """Test a SeedResult passed as foreign key is reused for each user."""
    channel = await seeder.seed("channel")

    await seeder.seed("user", {"channelID": channel})
    await seeder.seed("user", {"channelID": channel})

    assert len(writer.get_data("channels")) == 1

    users = writer.get_data("users")
    assert len(users) == 2
    assert users[0]["userID"] == 1
    assert users[0]["channelID"] == 1
    assert users[1]["userID"] == 2
    assert users[1]["channelID"] == 1


@pytest.mark.asyncio
async def test_channel_record_as_foreign_key(seeder, writer):
    """Test an already built record has its primary key extracted."""
    channel = await seeder.seed_object("channel")

    _, user, context = await seeder.seed("user", {"channelID": channel})

    assert len(writer.get_data("channels")) == 1
    assert user["channelID"] == channel["channelID"]
    assert context["channel"] is channel


@pytest.mark.asyncio
async def test_numeric_foreign_key_stored_verbatim(seeder, writer):
    """Test a numeric id skips creating the referenced row."""
    _, user, context = await seeder.seed("user", {"channelID": 42})

    assert writer.get_data("channels") == []
    assert writer.get_data("users")[0]["channelID"] == 42
    assert user["channelID"] == 42
    assert "channel" not in context
