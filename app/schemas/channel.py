"""Channel record schema stored in DynamoDB."""

from typing import Any

from pydantic import BaseModel, Field


class ChannelRecord(BaseModel):
    """Mapping of an IVS channel to the IVS Chat room created alongside it."""

    arn: str = Field(description="IVS channel ARN, the table partition key")
    chat_room_arn: str = Field(description="ARN of the chat room paired with the channel")

    def to_item(self) -> dict[str, dict[str, str]]:
        """Render as a DynamoDB item with typed attribute values."""
        return {
            "arn": {"S": self.arn},
            "chat_room_arn": {"S": self.chat_room_arn},
        }

    @classmethod
    def from_item(cls, item: dict[str, Any]) -> "ChannelRecord":
        return cls(
            arn=item["arn"]["S"],
            chat_room_arn=item["chat_room_arn"]["S"],
        )

    @staticmethod
    def key(arn: str) -> dict[str, dict[str, str]]:
        return {"arn": {"S": arn}}
