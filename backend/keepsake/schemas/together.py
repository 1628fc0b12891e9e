"""Together Timer Schemas — elapsed breakdown since the relationship anchor."""

from datetime import datetime

from pydantic import BaseModel, Field

from keepsake.core.elapsed import ElapsedBreakdown


class ElapsedResponse(BaseModel):
    years: int = Field(ge=0)
    months: int = Field(ge=0, le=11)
    weeks: int = Field(ge=0)
    days: int = Field(ge=0, le=6)
    hours: int = Field(ge=0, le=23)
    minutes: int = Field(ge=0, le=59)
    seconds: int = Field(ge=0, le=59)

    @classmethod
    def from_breakdown(cls, elapsed: ElapsedBreakdown) -> "ElapsedResponse":
        return cls(**elapsed.as_dict())


class TogetherResponse(BaseModel):
    since: datetime
    now: datetime
    elapsed: ElapsedResponse
