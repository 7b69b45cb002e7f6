"""Unit tests for URL fragment synchronization."""

from __future__ import annotations

from caseassist.models.actions import update_query
from caseassist.pipeline.url_sync import UrlStateSynchronizer
from caseassist.providers.browser.memory_location import MemoryLocation
from tests.conftest import RecordingEngine


class TestStart:
    def test_restores_state_from_fragment(self) -> None:
        engine = RecordingEngine()
        location = MemoryLocation("#q=broken%20mast&firstResult=10")
        UrlStateSynchronizer(engine, location).start()

        assert engine.state.query == "broken mast"
        assert engine.state.first_result == 10

    def test_empty_fragment_leaves_engine_alone(self, location: MemoryLocation) -> None:
        engine = RecordingEngine()
        UrlStateSynchronizer(engine, location).start()
        assert engine.state.query == ""
        assert location.hash == ""

    def test_start_is_idempotent(self, location: MemoryLocation) -> None:
        sync = UrlStateSynchronizer(RecordingEngine(), location)
        sync.start()
        sync.start()
        assert sync.active
        assert location.listener_count() == 1


class TestEngineToUrl:
    def test_state_change_replaces_fragment(self, location: MemoryLocation) -> None:
        engine = RecordingEngine()
        UrlStateSynchronizer(engine, location).start()

        engine.dispatch(update_query("mast"))
        assert location.hash == "#q=mast"
        engine.dispatch(update_query("boom"))
        assert location.hash == "#q=boom"
        # replace, never push
        assert location.history_length == 1

    def test_round_trip(self, location: MemoryLocation) -> None:
        engine = RecordingEngine()
        UrlStateSynchronizer(engine, location).start()
        engine.dispatch(update_query("rudder & keel"))

        restored = RecordingEngine()
        UrlStateSynchronizer(restored, MemoryLocation(location.hash)).start()
        assert restored.state == engine.state


class TestUrlToEngine:
    def test_navigation_updates_engine(self, location: MemoryLocation) -> None:
        engine = RecordingEngine()
        UrlStateSynchronizer(engine, location).start()

        location.navigate("#q=mast")
        assert engine.state.query == "mast"
        location.navigate("#q=boom")
        assert engine.state.query == "boom"

        location.back()
        assert engine.state.query == "mast"
        location.forward()
        assert engine.state.query == "boom"

    def test_own_fragment_not_reapplied(self, location: MemoryLocation) -> None:
        engine = RecordingEngine()
        UrlStateSynchronizer(engine, location).start()
        engine.dispatch(update_query("mast"))
        changes: list[None] = []
        engine.subscribe(lambda: changes.append(None))

        # Re-announcing the fragment the engine already reflects is a no-op.
        location.navigate("#q=other")
        location.back()
        location.forward()
        location.navigate(f"#{engine.fragment}")
        assert len(changes) == 3

    def test_stop_removes_listeners(self, location: MemoryLocation) -> None:
        engine = RecordingEngine()
        sync = UrlStateSynchronizer(engine, location)
        sync.start()
        sync.stop()

        assert not sync.active
        assert location.listener_count() == 0
        engine.dispatch(update_query("mast"))
        assert location.hash == ""
        location.navigate("#q=boom")
        assert engine.state.query == "mast"
