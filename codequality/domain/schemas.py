from typing import Literal

from pydantic import BaseModel, Field

ProviderName = Literal["openai", "anthropic", "google"]


class ProviderConfig(BaseModel):
    """Which vendor and model to call, and the key to call it with.

    The key lives only as long as the request or UI session that holds this
    object; it is excluded from ``repr`` so it never lands in a log line.
    """

    provider: ProviderName = "openai"
    model: str = ""
    api_key: str = Field("", repr=False)
