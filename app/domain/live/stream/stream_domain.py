"""Live stream domain service - orchestrates IVS, IVS Chat and DynamoDB calls."""

from loguru import logger

from app.app_config import StreamConfig
from app.schemas import ChannelRecord
from app.services.channel_store import ChannelRecordStore
from app.services.integrations.ivs_service import IvsService
from app.services.integrations.ivschat_service import IvsChatService
from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode

from ...utils.idgen import new_anonymous_user_id
from .stream_models import (
    LivePlaybackListResponse,
    LiveStreamDetailResponse,
    LiveStreamListResponse,
    StartLiveStreamResponse,
)


class LiveStreamService:
    """Sequential orchestration of the live stream operations.

    Every external call is awaited before the next one starts, and the first
    failure propagates to the caller.
    """

    def __init__(
        self,
        config: StreamConfig,
        ivs: IvsService | None = None,
        chat: IvsChatService | None = None,
        store: ChannelRecordStore | None = None,
    ):
        self._config = config
        self._ivs = ivs or IvsService(region=config.region)
        self._chat = chat or IvsChatService(region=config.region)
        self._store = store or ChannelRecordStore(
            table_name=config.table_name,
            region=config.region,
        )

    # ==================== START ====================

    async def start_live_stream(self) -> StartLiveStreamResponse:
        """Create a channel and its chat room, then persist the pairing.

        When rollback is enabled, resources created before a failing step are
        deleted and the original error is re-raised.
        """
        if not self._config.table_name:
            raise AppError(
                errcode=AppErrorCode.E_INTERNAL_ERROR,
                errmesg="TABLE_NAME not configured",
                status_code=HttpStatusCode.INTERNAL_SERVER_ERROR,
            )

        channel = await self._ivs.create_channel()

        room_arn: str | None = None
        try:
            room_arn = await self._chat.create_room()
            await self._store.put_record(ChannelRecord(arn=channel.arn, chat_room_arn=room_arn))
        except Exception:
            if self._config.rollback_partial_start:
                await self._rollback_start(channel.arn, room_arn)
            raise

        logger.info("Started live stream on channel {} with room {}", channel.arn, room_arn)
        return StartLiveStreamResponse(
            ingest_endpoint=channel.ingest_endpoint,
            stream_key=channel.stream_key,
        )

    async def _rollback_start(self, channel_arn: str, room_arn: str | None) -> None:
        logger.warning("Rolling back partial start: channel={} room={}", channel_arn, room_arn)

        if room_arn:
            try:
                await self._chat.delete_room(room_arn)
            except Exception as e:
                logger.error("Failed to delete chat room {} during rollback: {}", room_arn, e)

        try:
            await self._ivs.delete_channel(channel_arn)
        except Exception as e:
            logger.error("Failed to delete channel {} during rollback: {}", channel_arn, e)

    # ==================== LIST ====================

    async def list_live_streams(self) -> LiveStreamListResponse:
        """Return the ARN of every channel, unfiltered."""
        arns = await self._ivs.list_channel_arns()
        return LiveStreamListResponse(arns=arns)

    async def list_live_playback_urls(self) -> LivePlaybackListResponse:
        """Return playback URLs of channels that are broadcasting right now.

        Channels that are offline are skipped; any other error aborts.
        """
        arns = await self._ivs.list_channel_arns()

        playback_urls: list[str] = []
        for arn in arns:
            url = await self._ivs.get_stream_playback_url(arn)
            if url is None:
                continue
            playback_urls.append(url)

        logger.debug("{} of {} channels are live", len(playback_urls), len(arns))
        return LivePlaybackListResponse(playback_urls=playback_urls)

    # ==================== DETAIL ====================

    async def get_live_stream(self, arn: str | None) -> LiveStreamDetailResponse:
        """Get the playback URL of a channel with a chat token for a new anonymous user.

        Raises AppError if arn is empty or the channel has no record.
        """
        if not arn or not arn.strip():
            raise AppError(
                errcode=AppErrorCode.E_INVALID_REQUEST,
                errmesg="Query parameter 'arn' is required",
                status_code=HttpStatusCode.BAD_REQUEST,
            )

        channel = await self._ivs.get_channel(arn)

        record = await self._store.get_record(arn)
        if record is None:
            logger.warning(f"Channel record not found for {arn}")
            raise AppError(
                errcode=AppErrorCode.E_CHANNEL_NOT_FOUND,
                errmesg=f"Channel not found: {arn}",
                status_code=HttpStatusCode.NOT_FOUND,
            )

        user_id = new_anonymous_user_id()
        chat_token = await self._chat.create_chat_token(
            room_arn=record.chat_room_arn,
            user_id=user_id,
        )

        return LiveStreamDetailResponse(
            arn=channel.arn,
            playback_url=channel.playback_url,
            chat_token=chat_token,
        )
