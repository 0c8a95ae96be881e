from .config_loader import (
    SelectorProfile,
    get_profile,
    list_available_profiles,
    load_profiles,
)
from .content_resolver import resolve_content
from .dates import parse_date, strip_ordinals
from .navigation import parse_nav_links
from .submission_extractor import SubmissionExtractor, parse_online_text

__all__ = [
    'SelectorProfile', 'get_profile', 'list_available_profiles', 'load_profiles',
    'resolve_content', 'parse_date', 'strip_ordinals', 'parse_nav_links',
    'SubmissionExtractor', 'parse_online_text',
]
