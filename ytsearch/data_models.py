from collections import Counter
from typing import Dict, List
from pydantic import BaseModel, ConfigDict, Field, computed_field


class NormalizedResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    title: str = ""
    url: str
    thumbnail: str = ""
    duration: str = ""
    duration_sec: int = 0
    channel_name: str = ""
    channel_id: str = ""
    channel_url: str = ""
    is_live: bool = False
    is_short: bool = False


class SearchResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    results: List[NormalizedResult] = Field(default_factory=list)
    continuation_token: str = ""

    @computed_field
    @property
    def has_more(self) -> bool:
        return self.continuation_token != ""


class WalkStats:
    """Counters a caller can log after a walk: blocks seen, emitted, dropped by reason."""

    def __init__(self):
        self.blocks = 0
        self.emitted = 0
        self.dropped: Counter = Counter()

    def drop(self, reason: str):
        self.dropped[reason] += 1

    def as_dict(self) -> Dict[str, object]:
        return {"blocks": self.blocks, "emitted": self.emitted, "dropped": dict(self.dropped)}
