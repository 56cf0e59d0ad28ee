"""In-memory store for open quote drafts."""

import logging
import time
from typing import Callable, Dict, List, Optional

from cachetools import TTLCache

from .services.quote_session import QuoteFormSession
from .utils import ErrorCode, raise_error


logger = logging.getLogger(__name__)


class _DraftCache(TTLCache):
    """TTLCache that closes sessions as they expire or are evicted."""

    def popitem(self):
        key, session = super().popitem()
        session.close()
        return key, session

    def expire(self, now=None):
        expired = super().expire(now)
        for _, session in expired or ():
            session.close()
        return expired


class DraftStore:
    """Open quote sessions, dropped after a period of inactivity."""

    def __init__(
        self,
        draft_ttl: int = 3600,
        max_drafts: int = 200,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Initialize DraftStore.

        Args:
            draft_ttl: Seconds a draft survives without being touched
            max_drafts: Maximum number of open drafts
            clock: Monotonic clock in seconds (defaults to time.monotonic)
        """
        self.draft_ttl = draft_ttl
        self._drafts = _DraftCache(maxsize=max_drafts, ttl=draft_ttl, timer=clock or time.monotonic)
        logger.info("DraftStore initialized")

    def add(self, session: QuoteFormSession) -> None:
        """
        Add a quote session.

        Args:
            session: QuoteFormSession to add
        """
        self._drafts[session.id] = session
        logger.info(f"Draft added: {session.id}")

    def get(self, quote_id: str) -> QuoteFormSession:
        """
        Get a quote session by ID, refreshing its time-to-live.

        Args:
            quote_id: Quote ID

        Returns:
            QuoteFormSession

        Raises:
            APIError: If the draft does not exist or has expired
        """
        session = self._drafts.get(quote_id)
        if session is None:
            raise_error(ErrorCode.QUOTE_NOT_FOUND, status_code=404)
        self._drafts[quote_id] = session
        return session

    def remove(self, quote_id: str) -> None:
        """
        Close and delete a quote session.

        Args:
            quote_id: Quote ID to delete

        Raises:
            APIError: If the draft does not exist
        """
        session = self._drafts.pop(quote_id, None)
        if session is None:
            raise_error(ErrorCode.QUOTE_NOT_FOUND, status_code=404)
        session.close()
        logger.info(f"Draft deleted: {quote_id}")

    def list_ids(self) -> List[str]:
        self._drafts.expire()
        return list(self._drafts.keys())

    def get_stats(self) -> Dict[str, int]:
        """
        Get store statistics.

        Returns:
            Dictionary with draft counts and TTL
        """
        self._drafts.expire()
        return {
            "drafts": len(self._drafts),
            "max_drafts": int(self._drafts.maxsize),
            "draft_ttl": self.draft_ttl,
        }
