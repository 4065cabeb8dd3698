"""EventBus - 세션 내부 이벤트 통신

엔진은 상태 변화를 이벤트로 알리고, 시스템 로그 등 부가 기능은
구독만으로 붙는다. 엔진이 부가 기능을 직접 호출하지 않는다.

규칙:
- 이벤트 데이터는 원시 값(문자열/숫자) 위주로 담는다
- 핸들러 안에서 다시 발행하는 연쇄는 MAX_DEPTH 단계까지만 허용
- 한 턴 안에서 같은 이벤트가 여러 번 발행될 수 있다 (인식도 이중 증가 등)
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

from synapse.core.logging import get_logger

logger = get_logger(__name__)

MAX_DEPTH = 5  # 핸들러 내 재발행 최대 깊이


@dataclass
class GameEvent:
    """이벤트 데이터 컨테이너

    Args:
        event_type: 이벤트 유형 (예: "player_moved", "ending_reached")
        data: 이벤트 데이터
        source: 발행한 컴포넌트 이름
    """

    event_type: str
    data: Dict[str, Any]
    source: str

    _depth: int = field(default=0, repr=False)


EventHandler = Callable[[GameEvent], None]


class EventBus:
    """동기식 이벤트 버스

    사용 패턴:
        bus = EventBus()
        bus.subscribe("player_moved", system_log.on_player_moved)
        bus.emit(GameEvent(event_type="player_moved", data={"room": "Lobby"}, source="engine"))
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[EventHandler]] = defaultdict(list)
        self._current_depth: int = 0
        self._emitted_count: int = 0

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """이벤트 구독 등록"""
        self._handlers[event_type].append(handler)
        logger.debug(f"EventBus 구독: {event_type} → {handler.__qualname__}")

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        """이벤트 구독 해제. 미등록 핸들러는 경고만 남긴다."""
        try:
            self._handlers[event_type].remove(handler)
        except ValueError:
            logger.warning(f"핸들러 미등록: {event_type} → {handler.__qualname__}")

    def emit(self, event: GameEvent) -> None:
        """이벤트 발행. 등록된 핸들러를 등록 순서대로 동기 호출.

        핸들러 예외는 로그로 남기고 다음 핸들러를 계속 호출한다.
        """
        if self._current_depth >= MAX_DEPTH:
            logger.warning(
                f"EventBus 전파 깊이 초과 ({MAX_DEPTH}): "
                f"{event.source}:{event.event_type} 무시됨"
            )
            return

        event._depth = self._current_depth
        self._emitted_count += 1

        handlers = list(self._handlers.get(event.event_type, []))
        if not handlers:
            logger.debug(f"EventBus: {event.event_type} 구독자 없음")
            return

        self._current_depth += 1
        try:
            for handler in handlers:
                try:
                    handler(event)
                except Exception:
                    logger.exception(
                        f"EventBus 핸들러 에러: {handler.__qualname__} "
                        f"(event={event.event_type})"
                    )
        finally:
            self._current_depth -= 1

    def reset_chain(self) -> None:
        """턴 종료 시 호출. 턴 단위 발행 카운터 초기화."""
        if self._emitted_count:
            logger.debug(f"EventBus 턴 종료: {self._emitted_count}건 발행")
        self._emitted_count = 0
        self._current_depth = 0

    def clear(self) -> None:
        """모든 구독 해제 (테스트용)"""
        self._handlers.clear()
        self.reset_chain()

    @property
    def handler_count(self) -> int:
        """등록된 총 핸들러 수"""
        return sum(len(h) for h in self._handlers.values())

    @property
    def emitted_this_turn(self) -> int:
        """현재 턴에 발행된 이벤트 수"""
        return self._emitted_count
