"""Tests for environment configuration parsing."""

from app.app_config import AppEnvironConfig, StreamConfig


def test_defaults():
    cfg = AppEnvironConfig.from_environ({})

    assert cfg.REGION == "ap-northeast-1"
    assert cfg.TABLE_NAME == ""
    assert cfg.ROLLBACK_PARTIAL_START is True
    assert cfg.DEBUG is False
    assert cfg.API_PORT == 8000
    assert cfg.API_CORS_ORIGINS == ["*"]


def test_values_from_environment():
    cfg = AppEnvironConfig.from_environ(
        {
            "REGION": " us-west-2 ",
            "TABLE_NAME": "IvsSimpleTable",
            "ROLLBACK_PARTIAL_START": "false",
            "DEBUG": "TRUE",
            "API_PORT": "9000",
            "API_CORS_ORIGINS": "https://a.example, https://b.example",
        }
    )

    assert cfg.REGION == "us-west-2"
    assert cfg.TABLE_NAME == "IvsSimpleTable"
    assert cfg.ROLLBACK_PARTIAL_START is False
    assert cfg.DEBUG is True
    assert cfg.API_PORT == 9000
    assert cfg.API_CORS_ORIGINS == ["https://a.example", "https://b.example"]


def test_stream_config():
    cfg = AppEnvironConfig.from_environ({"REGION": "eu-west-1", "TABLE_NAME": "t"})

    assert cfg.stream_config() == StreamConfig(
        region="eu-west-1",
        table_name="t",
        rollback_partial_start=True,
    )


def test_environ_config_reads_process_environment():
    from app.shared.config import config

    assert config.get("TABLE_NAME") == "test-channel-table"
    assert config.get("NOT_A_CONFIGURED_KEY", "fallback") == "fallback"
