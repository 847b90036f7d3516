"""
Unit tests for portal/session_store.py
"""

from portal.session_store import SummarySessionStore


class TestSummarySessionStore:
    def test_creates_session_for_unknown_id(self):
        store = SummarySessionStore(ttl_minutes=10)
        sid, summary = store.get_or_create(None, now=0)
        assert len(sid) == 32
        assert len(store) == 1

        again_id, again = store.get_or_create(sid, now=5)
        assert again_id == sid
        assert again is summary

    def test_stale_id_gets_fresh_session(self):
        store = SummarySessionStore(ttl_minutes=10)
        sid, _ = store.get_or_create("not-a-real-id", now=0)
        assert sid != "not-a-real-id"

    def test_idle_sessions_expire(self):
        store = SummarySessionStore(ttl_minutes=1)
        sid, summary = store.get_or_create(None, now=0)
        new_id, new_summary = store.get_or_create(sid, now=61)
        assert new_id != sid
        assert new_summary is not summary
        assert len(store) == 1

    def test_access_refreshes_ttl(self):
        store = SummarySessionStore(ttl_minutes=1)
        sid, summary = store.get_or_create(None, now=0)
        store.get_or_create(sid, now=50)
        assert store.get_or_create(sid, now=100)[1] is summary

    def test_evict_expired(self):
        store = SummarySessionStore(ttl_minutes=1)
        store.get_or_create(None, now=0)
        store.get_or_create(None, now=30)
        assert store.evict_expired(now=70) == 1
        assert len(store) == 1
