from .config import Settings, get_settings
from .exceptions import ProfileNotFoundError, ScrapeError

__all__ = ['Settings', 'get_settings', 'ProfileNotFoundError', 'ScrapeError']
