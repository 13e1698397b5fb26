"""Tests for the DynamoDB channel record store."""

import pytest

from app.schemas import ChannelRecord
from app.services.channel_store import ChannelRecordStore
from app.utils.app_errors import AppError, AppErrorCode
from tests.fixtures.aws_fixtures import FakeSession


@pytest.fixture
def store(fake_session: FakeSession) -> ChannelRecordStore:
    return ChannelRecordStore(
        table_name="test-channel-table",
        region="ap-northeast-1",
        session=fake_session,  # type: ignore[arg-type]
    )


async def test_put_record_writes_typed_item(store, fake_session):
    await store.put_record(ChannelRecord(arn="a1", chat_room_arn="room1"))

    fake_session.get_client("dynamodb").put_item.assert_awaited_once_with(
        TableName="test-channel-table",
        Item={"arn": {"S": "a1"}, "chat_room_arn": {"S": "room1"}},
    )


async def test_get_record_found(store, fake_session):
    client = fake_session.get_client("dynamodb")
    client.get_item.return_value = {
        "Item": {"arn": {"S": "a1"}, "chat_room_arn": {"S": "room1"}}
    }

    record = await store.get_record("a1")

    assert record == ChannelRecord(arn="a1", chat_room_arn="room1")
    client.get_item.assert_awaited_once_with(
        TableName="test-channel-table",
        Key={"arn": {"S": "a1"}},
        ConsistentRead=True,
    )


async def test_get_record_missing(store, fake_session):
    fake_session.get_client("dynamodb").get_item.return_value = {}

    assert await store.get_record("a1") is None


async def test_missing_table_name_is_an_error(fake_session):
    store = ChannelRecordStore(table_name="", region="ap-northeast-1", session=fake_session)  # type: ignore[arg-type]

    with pytest.raises(AppError) as exc_info:
        await store.get_record("a1")

    assert exc_info.value.errcode == AppErrorCode.E_INTERNAL_ERROR
    assert fake_session.client_calls == []
