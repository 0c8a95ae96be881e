# furextract/core/exceptions.py
"""
Failure classification shared by every extraction stage.

A single exception type carries a human‑readable ``message`` and a ``retry``
hint.  The named constructors below are the only places that decide whether
a given failure mode is worth retrying, so callers never have to guess.

"Submission does not exist" is **not** an error – the extractor returns
``None`` for that case.
"""

from typing import Any, Dict, Optional


class ScrapeError(Exception):
    """Extraction / transport failure with a retry hint for the caller."""

    def __init__(self, message: str, retry: bool, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.retry = retry
        self.field = field

    def __repr__(self) -> str:
        return f"ScrapeError(message={self.message!r}, retry={self.retry})"

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict for logs / dead‑letter payloads."""
        payload: Dict[str, Any] = {"message": self.message, "retry": self.retry}
        if self.field is not None:
            payload["field"] = self.field
        return payload

    # ------------------------------------------------------------------
    # Availability failures – worth another attempt later
    # ------------------------------------------------------------------
    @classmethod
    def from_transport(cls, exc: BaseException) -> "ScrapeError":
        """Network error, timeout, refused connection …"""
        return cls(str(exc) or exc.__class__.__name__, retry=True)

    @classmethod
    def server_error(cls, status_code: int) -> "ScrapeError":
        return cls(f"got server error: {status_code}", retry=True)

    @classmethod
    def missing_attribute(cls, field: str, attribute: str) -> "ScrapeError":
        """
        The marker element exists but its asset reference does not.
        Seen when the page is served half‑rendered, so it is retryable.
        """
        return cls(f"unable to get {attribute} attribute", retry=True, field=field)

    # ------------------------------------------------------------------
    # Structural / content failures – will recur deterministically
    # ------------------------------------------------------------------
    @classmethod
    def missing_field(cls, field: str) -> "ScrapeError":
        return cls(f"unable to select {field}", retry=False, field=field)

    @classmethod
    def invalid_number(cls, text: str) -> "ScrapeError":
        return cls(f"value was not number: {text!r}", retry=False)

    @classmethod
    def invalid_date(cls, text: str) -> "ScrapeError":
        return cls(f"unable to parse date: {text!r}", retry=False, field="posted_at")

    @classmethod
    def invalid_value(cls, field: str, value: str) -> "ScrapeError":
        return cls(f"unknown {field} value: {value!r}", retry=False, field=field)

    @classmethod
    def value_not_found(cls, what: str) -> "ScrapeError":
        return cls(f"unable to find {what}", retry=False, field=what)

    @classmethod
    def decode_failed(cls, exc: BaseException) -> "ScrapeError":
        return cls(f"unable to decode image: {exc}", retry=False)

    @classmethod
    def invalid_submission_type(cls) -> "ScrapeError":
        """Neither image nor animation markup – the page is not a submission."""
        return cls("invalid submission type", retry=False, field="content")

    @classmethod
    def invalid_record(cls, exc: BaseException) -> "ScrapeError":
        """Extracted values failed model validation."""
        return cls(f"extracted values were invalid: {exc}", retry=False)


class ProfileNotFoundError(KeyError):
    """Raised when a requested selector profile does not exist in the YAML."""

    def __init__(self, profile_name: str):
        super().__init__(f"Selector profile '{profile_name}' not found.")
        self.profile_name = profile_name
