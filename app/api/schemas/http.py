from pydantic import BaseModel, Field


class HttpRequest(BaseModel):
    """Transport-neutral view of an incoming request."""

    method: str
    path: str
    query_params: dict[str, str] = Field(default_factory=dict)


class HttpResponse(BaseModel):
    status_code: int
    body: str
    headers: dict[str, str] = Field(default_factory=dict)
