from typing import Any

from pydantic import BaseModel


class WebhookEvent(BaseModel):
    eventName: str | None = None
    response: dict[str, Any] | None = None
    request: dict[str, Any] | None = None
