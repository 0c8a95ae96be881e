# furextract/services/transport/client.py
"""
High‑level entry point: fetch pages through a transport, run the extractor
and the fingerprint engine, and hand typed results back to the caller.

No retries happen here.  Every ``ScrapeError`` carries a ``retry`` hint and
the caller decides what to do with it.
"""

from typing import Optional

from loguru import logger

from furextract.core.config import Settings, get_settings
from furextract.core.exceptions import ScrapeError
from furextract.models.online import OnlineCounts
from furextract.models.submission import Submission
from furextract.services.extractor.submission_extractor import SubmissionExtractor
from furextract.services.fingerprint.hasher import fingerprint_submission

from .http import HttpTransport, Transport


class FurAffinityClient:
    """
    Wires a :class:`Transport` to a :class:`SubmissionExtractor`.

    Both collaborators are injected; :meth:`create` builds the default pair
    from settings.
    """

    def __init__(
        self,
        transport: Transport,
        extractor: SubmissionExtractor,
        base_url: str = "https://www.furaffinity.net",
    ):
        self.transport = transport
        self.extractor = extractor
        self.base_url = base_url.rstrip("/")

    @classmethod
    def create(cls, settings: Optional[Settings] = None) -> "FurAffinityClient":
        """Factory using ``HttpTransport`` and the configured selector profile."""
        settings = settings or get_settings()
        extractor = SubmissionExtractor.from_settings(settings)
        logger.debug(
            f"Using selector profile '{settings.SELECTOR_PROFILE}' against {settings.BASE_URL}"
        )
        return cls(
            transport=HttpTransport(settings),
            extractor=extractor,
            base_url=settings.BASE_URL,
        )

    def __enter__(self) -> "FurAffinityClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        close = getattr(self.transport, "close", None)
        if close is not None:
            close()

    # ------------------------------------------------------------------
    # URLs
    # ------------------------------------------------------------------
    def front_page_url(self) -> str:
        return f"{self.base_url}/"

    def submission_url(self, submission_id: int) -> str:
        return f"{self.base_url}/view/{submission_id}/"

    # ------------------------------------------------------------------
    # Front page
    # ------------------------------------------------------------------
    def latest_id(self) -> int:
        """Id of the newest submission on the site."""
        page = self.transport.fetch_document(self.front_page_url())
        latest = self.extractor.parse_latest_id(page)
        logger.info(f"Latest submission id is {latest}")
        return latest

    def online_counts(self) -> Optional[OnlineCounts]:
        page = self.transport.fetch_document(self.front_page_url())
        return self.extractor.parse_online_counts(page)

    # ------------------------------------------------------------------
    # Submissions
    # ------------------------------------------------------------------
    def get_submission(self, submission_id: int) -> Optional[Submission]:
        """
        Fetch and extract one submission.

        Returns ``None`` when the site reports that it does not exist.
        """
        page = self.transport.fetch_document(self.submission_url(submission_id))
        try:
            submission = self.extractor.parse_submission(submission_id, page)
        except ScrapeError as exc:
            logger.warning(f"Submission {submission_id} failed to parse: {exc.message} (retry={exc.retry})")
            raise

        if submission is None:
            logger.info(f"Submission {submission_id} does not exist")
        else:
            logger.debug(f"Parsed submission {submission_id} by {submission.artist}")
        return submission

    def calc_image_hash(self, submission: Submission, keep_raw: bool = False) -> Submission:
        """
        Download the submission's image and return a fingerprinted copy.

        Animation submissions are returned unchanged without a download.
        """
        if not submission.is_image:
            return submission

        data = self.transport.fetch_binary(submission.content.url)
        hashed = fingerprint_submission(submission, data, keep_raw=keep_raw)
        logger.debug(
            f"Fingerprinted submission {submission.id}: "
            f"{hashed.fingerprint.perceptual_hash_b64} ({len(data)} bytes)"
        )
        return hashed
