"""Live stream domain models."""

from pydantic import BaseModel


class StartLiveStreamResponse(BaseModel):
    """Ingest details of a newly created channel, returned once."""

    ingest_endpoint: str
    stream_key: str


class LiveStreamListResponse(BaseModel):
    """Channel ARNs in platform order."""

    arns: list[str]


class LivePlaybackListResponse(BaseModel):
    """Playback URLs of the channels currently broadcasting."""

    playback_urls: list[str]


class LiveStreamDetailResponse(BaseModel):
    """Playback URL and a fresh chat token for one channel."""

    arn: str
    playback_url: str
    chat_token: str
