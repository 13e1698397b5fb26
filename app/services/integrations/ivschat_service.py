"""Amazon IVS Chat helper service.

This module provides a thin wrapper around the `ivschat` client of aioboto3.

Usage:
    from app.services.integrations.ivschat_service import IvsChatService

    chat = IvsChatService(region="ap-northeast-1")

    room_arn = await chat.create_room()
    token = await chat.create_chat_token(room_arn, user_id="anon-123")
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aioboto3
from loguru import logger


class IvsChatService:
    """Service wrapper for the Amazon IVS Chat API."""

    # Anonymous viewers may post messages, nothing more
    DEFAULT_CAPABILITIES = ("SEND_MESSAGE",)

    def __init__(self, region: str, session: aioboto3.Session | None = None) -> None:
        self._region = region
        self._session = session
        logger.debug("IvsChatService initialized for region: {}", region)

    def _get_session(self) -> aioboto3.Session:
        if self._session is None:
            self._session = aioboto3.Session(region_name=self._region)
        return self._session

    @asynccontextmanager
    async def _get_client(self) -> AsyncIterator:  # type: ignore[misc]
        session = self._get_session()
        async with session.client("ivschat", region_name=self._region) as client:  # type: ignore[attr-defined]
            yield client

    async def create_room(self) -> str:
        """Create a chat room with default settings.

        Returns:
            ARN of the new room
        """
        async with self._get_client() as client:
            response = await client.create_room()

        logger.info("Created IVS chat room: {}", response["arn"])
        return response["arn"]

    async def create_chat_token(
        self,
        room_arn: str,
        user_id: str,
        capabilities: tuple[str, ...] | list[str] = DEFAULT_CAPABILITIES,
    ) -> str:
        """Mint a chat token for one user in a room.

        Args:
            room_arn: Room identifier (ARN)
            user_id: Identity the token is issued to
            capabilities: Granted actions, SEND_MESSAGE only by default

        Returns:
            Encrypted chat token string
        """
        async with self._get_client() as client:
            response = await client.create_chat_token(
                roomIdentifier=room_arn,
                userId=user_id,
                capabilities=list(capabilities),
            )

        logger.debug("Created chat token for user {} in room {}", user_id, room_arn)
        return response["token"]

    async def delete_room(self, room_arn: str) -> None:
        async with self._get_client() as client:
            await client.delete_room(identifier=room_arn)
        logger.info("Deleted IVS chat room: {}", room_arn)
