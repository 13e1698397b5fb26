from pydantic import BaseModel, Field


class StartLiveStreamOut(BaseModel):
    ingest_endpoint: str = Field(description="RTMP(S) ingest server of the new channel")
    stream_key: str = Field(description="Secret stream key for the broadcaster")


class ListLiveStreamsOut(BaseModel):
    arns: list[str] = Field(description="ARNs of all channels, in platform order")


class ListLivePlaybackOut(BaseModel):
    playback_urls: list[str] = Field(description="Playback URLs of channels that are live")


class LiveStreamOut(BaseModel):
    arn: str = Field(description="Channel ARN")
    playback_url: str = Field(description="HLS playback URL of the channel")
    chat_token: str = Field(description="Chat token for a fresh anonymous user")
