from pydantic import BaseModel

from app.shared.config import EnvironConfig, config


def _flag(value: str | None, default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"true", "1", "yes", "on"}


class StreamConfig(BaseModel):
    """Settings handed to the stream orchestrator and its AWS service wrappers."""

    region: str
    table_name: str
    # Delete the channel/room created earlier in a failed start request
    rollback_partial_start: bool = True


class AppEnvironConfig(BaseModel):
    DEBUG: bool = False

    # AWS configuration
    REGION: str = "ap-northeast-1"
    TABLE_NAME: str = ""
    ROLLBACK_PARTIAL_START: bool = True

    # Local HTTP server (granian)
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_WORKERS: int = 1
    API_CORS_ORIGINS: list[str] = ["*"]

    @classmethod
    def from_environ(cls, source: EnvironConfig | dict) -> "AppEnvironConfig":
        origins = (source.get("API_CORS_ORIGINS") or "*").strip()
        return cls(
            DEBUG=_flag(source.get("DEBUG"), False),
            REGION=(source.get("REGION") or "").strip() or "ap-northeast-1",
            TABLE_NAME=(source.get("TABLE_NAME") or "").strip(),
            ROLLBACK_PARTIAL_START=_flag(source.get("ROLLBACK_PARTIAL_START"), True),
            API_HOST=(source.get("API_HOST") or "").strip() or "0.0.0.0",
            API_PORT=int((source.get("API_PORT") or "").strip() or 8000),
            API_WORKERS=int((source.get("API_WORKERS") or "").strip() or 1),
            API_CORS_ORIGINS=[x.strip() for x in origins.split(",") if x.strip()],
        )

    def stream_config(self) -> StreamConfig:
        return StreamConfig(
            region=self.REGION,
            table_name=self.TABLE_NAME,
            rollback_partial_start=self.ROLLBACK_PARTIAL_START,
        )


_app_environ_config: AppEnvironConfig | None = None


def get_app_environ_config() -> AppEnvironConfig:
    global _app_environ_config
    if _app_environ_config is None:
        _app_environ_config = AppEnvironConfig.from_environ(config)
    return _app_environ_config
