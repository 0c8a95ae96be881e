"""Structured extraction and media fingerprinting for FurAffinity pages."""

from .core.exceptions import ProfileNotFoundError, ScrapeError
from .models import NavLinks, OnlineCounts, Submission

__version__ = "0.1.0"

__all__ = ['ProfileNotFoundError', 'ScrapeError', 'NavLinks', 'OnlineCounts', 'Submission']
