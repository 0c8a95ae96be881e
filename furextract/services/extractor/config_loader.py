# furextract/services/extractor/config_loader.py
"""
Loads the selector profiles from ``configs/selectors.yaml`` and validates them
with Pydantic models.  The file can contain a top‑level ``profiles`` key or
just the mapping of profile names → profile dictionaries.

Public API:
* ``load_profiles(path)`` – parse + validate the whole file.
* ``get_profile(name, path)`` – returns a validated ``SelectorProfile`` or
  raises ``ProfileNotFoundError``.
* ``list_available_profiles(path)`` – convenience helper for CLI / tooling.

Nothing is cached at module level: load the profile once at start‑up and hand
it to :class:`~furextract.services.extractor.submission_extractor.SubmissionExtractor`.
"""

import re
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator

from furextract.core.exceptions import ProfileNotFoundError

# ----------------------------------------------------------------------
# Pydantic schemas – runtime validation and readable error messages
# ----------------------------------------------------------------------


class SubmissionSelectors(BaseModel):
    """Where every field of a submission view page lives."""

    page_title_sentinel: str = "System Error"
    not_found: str
    title: str
    artist: str
    artist_path_prefix: str = "/user/"
    image: str
    image_attribute: str = "src"
    animation: str
    animation_attribute: str = "data"
    asset_scheme: str = "https:"
    posted_at: str
    posted_at_attribute: str = "title"
    rating: str
    tags: str
    description: str


class NavigationSelectors(BaseModel):
    """Series navigation embedded in descriptions."""

    marker: str
    separator: str = "|"
    link_pattern: str = r"/view/(\d+)"

    @field_validator("link_pattern")
    @classmethod
    def _validate_regex(cls, pattern: str) -> str:
        """Ensure the pattern compiles and captures the id."""
        try:
            compiled = re.compile(pattern)
        except re.error as exc:
            raise ValueError(f"Invalid regex pattern '{pattern}': {exc}") from exc
        if compiled.groups < 1:
            raise ValueError(f"Pattern '{pattern}' must capture the submission id")
        return pattern


class FrontPageSelectors(BaseModel):
    """Selectors used on the site's home page."""

    latest_submission: str
    online_stats: str


class SelectorProfile(BaseModel):
    """Complete structural description of one era of the site markup."""

    submission: SubmissionSelectors
    navigation: NavigationSelectors
    front_page: FrontPageSelectors


class AllProfiles(BaseModel):
    """Top‑level container – maps profile name → its selectors."""

    profiles: Dict[str, SelectorProfile] = Field(default_factory=dict)


# ----------------------------------------------------------------------
# Internal helpers
# ----------------------------------------------------------------------
# Packaged default, resolved relative to this file (two levels up → package root)
CONFIG_PATH = Path(__file__).resolve().parents[2] / "configs" / "selectors.yaml"


def _load_yaml(path: Path) -> dict:
    """Read the YAML file and return the inner ``profiles`` mapping."""
    with path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    # Either {"profiles": {...}} or the bare mapping.
    return raw.get("profiles", raw)


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------
def load_profiles(path: Optional[Union[str, Path]] = None) -> AllProfiles:
    """
    Parse the YAML at ``path`` (packaged file by default) and validate it.

    Raises
    ------
    pydantic.ValidationError
        If the YAML does not conform to the ``SelectorProfile`` schema.
    """
    config_path = Path(path) if path is not None else CONFIG_PATH
    raw = _load_yaml(config_path)
    return AllProfiles(profiles=raw)


def get_profile(
    profile_name: str, path: Optional[Union[str, Path]] = None
) -> SelectorProfile:
    """
    Return a **validated** ``SelectorProfile`` for the requested name.

    Raises
    ------
    ProfileNotFoundError
        If the name is not present in the YAML.
    """
    all_profiles = load_profiles(path)
    try:
        return all_profiles.profiles[profile_name]
    except KeyError as exc:
        raise ProfileNotFoundError(profile_name) from exc


def list_available_profiles(path: Optional[Union[str, Path]] = None) -> List[str]:
    """All profile identifiers in the file."""
    return list(load_profiles(path).profiles.keys())
