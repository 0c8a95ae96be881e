# furextract/models/submission.py
from __future__ import annotations

import base64
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Literal, Optional, Tuple, Union
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

# Extension used when the asset's file name carries no dot at all.
PLACEHOLDER_EXTENSION = "a"


# ----------------------------------------------------------------------
#  Rating – closed set, anything else is a parse failure
# ----------------------------------------------------------------------
class Rating(str, Enum):
    GENERAL = "General"
    MATURE = "Mature"
    ADULT = "Adult"

    def serialize(self) -> str:
        """Single‑letter storage code (``g`` / ``m`` / ``a``)."""
        return {
            Rating.GENERAL: "g",
            Rating.MATURE: "m",
            Rating.ADULT: "a",
        }[self]


# ----------------------------------------------------------------------
#  Content – tagged union of raster image vs. animation / embedded object
# ----------------------------------------------------------------------
class _AssetContent(BaseModel):
    """Shared behaviour: everything about the file is derived from ``url``."""

    model_config = ConfigDict(frozen=True)

    url: str

    @field_validator("url")
    @classmethod
    def _require_scheme(cls, v: str) -> str:
        if not urlsplit(v).scheme:
            raise ValueError(f"content url must be absolute: {v!r}")
        return v

    @property
    def filename(self) -> str:
        """Final segment of the URL path."""
        return urlsplit(self.url).path.rsplit("/", 1)[-1]

    @property
    def extension(self) -> str:
        """Lower‑case text after the last ``.`` of :attr:`filename`."""
        name = self.filename
        if "." not in name:
            return PLACEHOLDER_EXTENSION
        return name.rsplit(".", 1)[-1].lower()


class ImageContent(_AssetContent):
    kind: Literal["image"] = "image"


class AnimationContent(_AssetContent):
    kind: Literal["animation"] = "animation"


Content = Annotated[Union[ImageContent, AnimationContent], Field(discriminator="kind")]


# ----------------------------------------------------------------------
#  Fingerprint – exact digest + perceptual hash of the fetched payload
# ----------------------------------------------------------------------
class Fingerprint(BaseModel):
    """
    Dual fingerprint of a raster payload.

    ``perceptual_hash_numeric`` and ``perceptual_hash_b64`` are computed from
    ``perceptual_hash`` and can never disagree with it.
    """

    model_config = ConfigDict(frozen=True, ser_json_bytes="base64")

    perceptual_hash: bytes = Field(..., min_length=8, max_length=8)
    content_digest: bytes = Field(..., min_length=32, max_length=32)
    content_size: int = Field(..., ge=0)
    raw_bytes: Optional[bytes] = Field(default=None, repr=False)

    @computed_field  # type: ignore[misc]
    @property
    def perceptual_hash_numeric(self) -> int:
        """Big‑endian signed 64‑bit reading of the perceptual hash."""
        return int.from_bytes(self.perceptual_hash, "big", signed=True)

    @computed_field  # type: ignore[misc]
    @property
    def perceptual_hash_b64(self) -> str:
        return base64.b64encode(self.perceptual_hash).decode("ascii")


# ----------------------------------------------------------------------
#  Submission – one piece of content, built atomically by the extractor
# ----------------------------------------------------------------------
class Submission(BaseModel):
    """
    Canonical record for one submission.

    Instances are immutable; fingerprinting produces a new record through
    :meth:`with_fingerprint`.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    title: str = Field(..., min_length=1)
    artist: str = Field(..., min_length=1)
    content: Content
    rating: Rating
    posted_at: datetime
    tags: Tuple[str, ...] = ()
    description: str
    fingerprint: Optional[Fingerprint] = None

    @field_validator("posted_at")
    @classmethod
    def _as_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None or v.utcoffset() is None:
            raise ValueError("posted_at must be timezone-aware")
        return v.astimezone(timezone.utc)

    # extension / filename always come from the same URL as ``content``
    @computed_field  # type: ignore[misc]
    @property
    def extension(self) -> str:
        return self.content.extension

    @computed_field  # type: ignore[misc]
    @property
    def filename(self) -> str:
        return self.content.filename

    @property
    def is_image(self) -> bool:
        return isinstance(self.content, ImageContent)

    def with_fingerprint(self, fingerprint: Fingerprint) -> "Submission":
        """Return a copy carrying ``fingerprint``; ``self`` is left untouched."""
        return self.model_copy(update={"fingerprint": fingerprint})

    def to_dict(self) -> dict:
        """JSON‑ready dict (datetimes as ISO strings, bytes as base64)."""
        return self.model_dump(mode="json", exclude={"fingerprint": {"raw_bytes"}})
