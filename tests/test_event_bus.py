"""EventBus 테스트"""

from synapse.core.event_bus import MAX_DEPTH, EventBus, GameEvent


class TestSubscribeEmit:
    def test_basic_emit(self):
        bus = EventBus()
        received = []
        bus.subscribe("test_event", lambda e: received.append(e))
        bus.emit(GameEvent(event_type="test_event", data={"id": "1"}, source="test"))
        assert len(received) == 1
        assert received[0].data["id"] == "1"

    def test_multiple_handlers_in_order(self):
        bus = EventBus()
        results = []
        bus.subscribe("evt", lambda e: results.append("a"))
        bus.subscribe("evt", lambda e: results.append("b"))
        bus.emit(GameEvent(event_type="evt", data={}, source="test"))
        assert results == ["a", "b"]

    def test_no_handlers(self):
        """구독자 없는 이벤트 발행: 에러 없이 무시"""
        EventBus().emit(GameEvent(event_type="no_one_listens", data={}, source="test"))

    def test_unsubscribe(self):
        bus = EventBus()
        received = []
        handler = lambda e: received.append(e)  # noqa: E731
        bus.subscribe("evt", handler)
        bus.unsubscribe("evt", handler)
        bus.emit(GameEvent(event_type="evt", data={}, source="test"))
        assert received == []

    def test_unsubscribe_nonexistent(self):
        """미등록 핸들러 해제: 경고만, 에러 없음"""
        EventBus().unsubscribe("evt", lambda e: None)

    def test_same_event_twice_in_one_turn(self):
        """같은 턴에 같은 이벤트가 두 번 와도 모두 전달"""
        bus = EventBus()
        received = []
        bus.subscribe("awareness_changed", received.append)
        for _ in range(2):
            bus.emit(GameEvent(event_type="awareness_changed", data={"delta": 5}, source="engine"))
        assert len(received) == 2


class TestDepthLimit:
    def test_max_depth_prevents_infinite_loop(self):
        bus = EventBus()
        call_count = 0

        def recursive_handler(event: GameEvent):
            nonlocal call_count
            call_count += 1
            bus.emit(GameEvent(event_type="chain", data={}, source="handler"))

        bus.subscribe("chain", recursive_handler)
        bus.emit(GameEvent(event_type="chain", data={}, source="origin"))
        assert call_count == MAX_DEPTH


class TestErrorIsolation:
    def test_handler_error_does_not_stop_others(self, caplog):
        bus = EventBus()
        received = []

        def broken(event: GameEvent):
            raise RuntimeError("boom")

        bus.subscribe("evt", broken)
        bus.subscribe("evt", received.append)
        bus.emit(GameEvent(event_type="evt", data={}, source="test"))
        assert len(received) == 1
        assert "boom" in caplog.text


class TestTurnCounters:
    def test_reset_chain(self):
        bus = EventBus()
        bus.emit(GameEvent(event_type="a", data={}, source="t"))
        bus.emit(GameEvent(event_type="b", data={}, source="t"))
        assert bus.emitted_this_turn == 2
        bus.reset_chain()
        assert bus.emitted_this_turn == 0

    def test_clear(self):
        bus = EventBus()
        bus.subscribe("a", lambda e: None)
        bus.subscribe("b", lambda e: None)
        assert bus.handler_count == 2
        bus.clear()
        assert bus.handler_count == 0
