from uuid import uuid4


def new_anonymous_user_id() -> str:
    """Random identity for a chat viewer (uuid4, 122 random bits)."""
    return str(uuid4())
