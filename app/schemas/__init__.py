"""Schemas for records persisted in DynamoDB."""

from .channel import ChannelRecord

__all__ = [
    "ChannelRecord",
]
