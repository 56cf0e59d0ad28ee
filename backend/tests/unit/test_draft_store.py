"""Tests for DraftStore TTL expiry."""

import pytest

from pharmaquote.services.quote_session import QuoteFormSession
from pharmaquote.store import DraftStore
from pharmaquote.utils import APIError, ErrorCode


class TestDraftStore:
    """Draft lifetime and lookups."""

    def test_add_and_get(self, mock_store: DraftStore):
        session = QuoteFormSession()
        mock_store.add(session)
        assert mock_store.get(session.id) is session
        assert mock_store.list_ids() == [session.id]

    def test_missing_draft_raises_not_found(self, mock_store: DraftStore):
        with pytest.raises(APIError) as exc_info:
            mock_store.get("missing")
        assert exc_info.value.error_code == ErrorCode.QUOTE_NOT_FOUND
        assert exc_info.value.status_code == 404

    def test_expired_draft_is_closed(self, mock_store: DraftStore, clock):
        session = QuoteFormSession()
        mock_store.add(session)

        clock.advance(61)
        assert mock_store.list_ids() == []
        assert session.closed
        with pytest.raises(APIError):
            mock_store.get(session.id)

    def test_access_refreshes_ttl(self, mock_store: DraftStore, clock):
        session = QuoteFormSession()
        mock_store.add(session)

        clock.advance(40)
        mock_store.get(session.id)
        clock.advance(40)

        assert mock_store.get(session.id) is session
        assert not session.closed

    def test_remove_closes_session(self, mock_store: DraftStore):
        session = QuoteFormSession()
        mock_store.add(session)
        mock_store.remove(session.id)

        assert session.closed
        with pytest.raises(APIError):
            mock_store.remove(session.id)

    def test_eviction_closes_oldest(self, clock):
        store = DraftStore(draft_ttl=60, max_drafts=2, clock=clock)
        sessions = [QuoteFormSession() for _ in range(3)]
        for session in sessions:
            store.add(session)

        assert sessions[0].closed
        assert sorted(store.list_ids()) == sorted(s.id for s in sessions[1:])

    def test_stats(self, mock_store: DraftStore):
        mock_store.add(QuoteFormSession())
        assert mock_store.get_stats() == {"drafts": 1, "max_drafts": 10, "draft_ttl": 60}
