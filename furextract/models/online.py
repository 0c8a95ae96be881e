from pydantic import BaseModel, ConfigDict, Field


class OnlineCounts(BaseModel):
    """Users‑online counters shown on the front page."""

    model_config = ConfigDict(frozen=True)

    total: int = Field(default=0, ge=0)
    guests: int = Field(default=0, ge=0)
    registered: int = Field(default=0, ge=0)
    other: int = Field(default=0, ge=0)
