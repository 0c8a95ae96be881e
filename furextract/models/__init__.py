from .submission import (
    AnimationContent,
    Content,
    Fingerprint,
    ImageContent,
    Rating,
    Submission,
)
from .navigation import NavLinks
from .online import OnlineCounts  # makes `from furextract.models import OnlineCounts` work too

__all__ = [
    'AnimationContent', 'Content', 'Fingerprint', 'ImageContent', 'Rating', 'Submission',
    'NavLinks', 'OnlineCounts',
]
