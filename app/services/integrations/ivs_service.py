"""Amazon IVS helper service.

This module provides a thin wrapper around the `ivs` client of aioboto3.

Usage:
    from app.services.integrations.ivs_service import IvsService

    ivs = IvsService(region="ap-northeast-1")

    # Create a low latency, basic tier channel
    channel = await ivs.create_channel()

    # List every channel ARN, exhausting the paginator
    arns = await ivs.list_channel_arns()

    # Playback URL of a channel that is currently live (None when offline)
    url = await ivs.get_stream_playback_url(channel.arn)
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aioboto3
from botocore.exceptions import ClientError
from loguru import logger
from pydantic import BaseModel

# Error codes IVS returns from GetStream when a channel has no live stream
NOT_LIVE_ERROR_CODES = frozenset({"ChannelNotBroadcasting", "ResourceNotFoundException"})


class IvsChannel(BaseModel):
    """IVS channel data model."""

    arn: str
    playback_url: str
    ingest_endpoint: str | None = None


class IvsCreatedChannel(IvsChannel):
    """Channel returned by CreateChannel, with its stream key."""

    ingest_endpoint: str
    stream_key: str


class IvsService:
    """Service wrapper for the Amazon IVS API."""

    LATENCY_MODE = "LOW"
    CHANNEL_TYPE = "BASIC"

    def __init__(self, region: str, session: aioboto3.Session | None = None) -> None:
        self._region = region
        self._session = session
        logger.debug("IvsService initialized for region: {}", region)

    def _get_session(self) -> aioboto3.Session:
        if self._session is None:
            self._session = aioboto3.Session(region_name=self._region)
        return self._session

    @asynccontextmanager
    async def _get_client(self) -> AsyncIterator:  # type: ignore[misc]
        """Get async IVS client context manager."""
        session = self._get_session()
        async with session.client("ivs", region_name=self._region) as client:  # type: ignore[attr-defined]
            yield client

    async def create_channel(self) -> IvsCreatedChannel:
        """Create a channel with low latency, basic tier and insecure ingest allowed.

        Raises:
            ClientError: If channel creation fails
        """
        async with self._get_client() as client:
            response = await client.create_channel(
                latencyMode=self.LATENCY_MODE,
                type=self.CHANNEL_TYPE,
                insecureIngest=True,
            )

        channel = response["channel"]
        created = IvsCreatedChannel(
            arn=channel["arn"],
            playback_url=channel.get("playbackUrl", ""),
            ingest_endpoint=channel["ingestEndpoint"],
            stream_key=response["streamKey"]["value"],
        )
        logger.info("Created IVS channel: {}", created.arn)
        return created

    async def list_channel_arns(self) -> list[str]:
        """Return the ARN of every channel, in the order IVS pages them."""
        arns: list[str] = []
        async with self._get_client() as client:
            paginator = client.get_paginator("list_channels")
            async for page in paginator.paginate():
                arns.extend(channel["arn"] for channel in page.get("channels", []))

        logger.debug("Listed {} IVS channels", len(arns))
        return arns

    async def get_channel(self, arn: str) -> IvsChannel:
        """Get channel metadata by ARN.

        Raises:
            ClientError: If the channel does not exist or the call fails
        """
        async with self._get_client() as client:
            response = await client.get_channel(arn=arn)

        channel = response["channel"]
        return IvsChannel(
            arn=channel["arn"],
            playback_url=channel["playbackUrl"],
            ingest_endpoint=channel.get("ingestEndpoint"),
        )

    async def get_stream_playback_url(self, arn: str) -> str | None:
        """Get the playback URL of the live stream on a channel.

        Returns:
            Playback URL, or None if the channel is not broadcasting

        Raises:
            ClientError: For any error other than the channel being offline
        """
        try:
            async with self._get_client() as client:
                response = await client.get_stream(channelArn=arn)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in NOT_LIVE_ERROR_CODES:
                logger.debug("IVS channel {} is not broadcasting", arn)
                return None
            raise

        return response["stream"]["playbackUrl"]

    async def delete_channel(self, arn: str) -> None:
        async with self._get_client() as client:
            await client.delete_channel(arn=arn)
        logger.info("Deleted IVS channel: {}", arn)
