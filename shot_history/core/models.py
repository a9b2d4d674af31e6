"""Data types shared by the services and managers."""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shot_history.utils.validation import (
    ensure_sequence,
    ensure_valid_bool,
    ensure_valid_count,
)

LIMIT = 5


@dataclass(frozen=True)
class ShotSample:
    t: int
    target_temperature: float
    current_temperature: float
    target_pressure: float
    current_pressure: float
    pump_flow: float
    target_flow: float
    puck_flow: float
    bluetooth_flow: float
    bluetooth_weight: float
    estimated_weight: float


@dataclass(frozen=True)
class HistoryItem:
    """One recorded shot. Only ``id`` is relied upon by the pagination code."""

    id: str
    version: str = ""
    profile: str = ""
    timestamp: int = 0
    samples: Tuple[ShotSample, ...] = field(default_factory=tuple)

    @property
    def duration_ms(self) -> int:
        if not self.samples:
            return 0
        return self.samples[-1].t

    @property
    def final_weight(self) -> float:
        if not self.samples:
            return 0.0
        return max(s.bluetooth_weight or s.estimated_weight for s in self.samples)


class RawPage(BaseModel):
    """One ``res:history:list`` response, sanitized on construction.

    ``history`` stays raw: records are handed to the parser unchanged.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    history: List[Any] = Field(default_factory=list)
    total: int = 0
    has_more: bool = Field(default=False, alias="hasMore")

    @field_validator("history", mode="before")
    @classmethod
    def _coerce_history(cls, v: Any) -> List[Any]:
        return ensure_sequence(v)

    @field_validator("total", mode="before")
    @classmethod
    def _coerce_total(cls, v: Any) -> int:
        return ensure_valid_count(v)

    @field_validator("has_more", mode="before")
    @classmethod
    def _coerce_has_more(cls, v: Any) -> bool:
        return ensure_valid_bool(v)

    @classmethod
    def from_response(cls, response: Optional[dict]) -> "RawPage":
        if not isinstance(response, dict):
            return cls()
        return cls.model_validate(response)
