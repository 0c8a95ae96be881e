from typing import Optional

from pydantic import BaseModel, ConfigDict


class NavLinks(BaseModel):
    """Series navigation embedded in a description (prev | first | next)."""

    model_config = ConfigDict(frozen=True)

    prev: Optional[int] = None
    first: Optional[int] = None
    next: Optional[int] = None
