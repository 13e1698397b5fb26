"""DynamoDB store for channel to chat room records."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aioboto3
from loguru import logger

from app.schemas import ChannelRecord
from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode


class ChannelRecordStore:
    """Reads and writes ChannelRecord items in a single DynamoDB table."""

    def __init__(
        self,
        table_name: str,
        region: str,
        session: aioboto3.Session | None = None,
    ) -> None:
        self._table_name = table_name
        self._region = region
        self._session = session

    def _get_session(self) -> aioboto3.Session:
        if self._session is None:
            self._session = aioboto3.Session(region_name=self._region)
        return self._session

    def _get_table_name(self) -> str:
        if not self._table_name:
            raise AppError(
                errcode=AppErrorCode.E_INTERNAL_ERROR,
                errmesg="TABLE_NAME not configured",
                status_code=HttpStatusCode.INTERNAL_SERVER_ERROR,
            )
        return self._table_name

    @asynccontextmanager
    async def _get_client(self) -> AsyncIterator:  # type: ignore[misc]
        session = self._get_session()
        async with session.client("dynamodb", region_name=self._region) as client:  # type: ignore[attr-defined]
            yield client

    async def put_record(self, record: ChannelRecord) -> None:
        table_name = self._get_table_name()
        async with self._get_client() as client:
            await client.put_item(TableName=table_name, Item=record.to_item())
        logger.info("Saved channel record: {} -> {}", record.arn, record.chat_room_arn)

    async def get_record(self, arn: str) -> ChannelRecord | None:
        """Fetch the record for a channel ARN.

        Returns:
            The record, or None when the table has no item for the ARN
        """
        table_name = self._get_table_name()
        async with self._get_client() as client:
            response = await client.get_item(
                TableName=table_name,
                Key=ChannelRecord.key(arn),
                ConsistentRead=True,
            )

        item = response.get("Item")
        if not item:
            logger.debug("No channel record for: {}", arn)
            return None
        return ChannelRecord.from_item(item)
