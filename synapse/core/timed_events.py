"""턴 예약 이벤트

정확히 그 턴 수에서만 한 번 발동한다. 범위 검사는 하지 않으므로
해당 턴을 건너뛰면 (예: 로드로 턴 수가 바뀌면) 발동하지 않는다.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

from synapse.core.logging import get_logger

logger = get_logger(__name__)


class TimedEffect(str, Enum):
    WARNING = "warning"  # 메시지만
    LOCKDOWN = "lockdown"  # lockdown 플래그 설정
    SANITY_PENALTY = "sanity_penalty"  # 정신력 감소
    GLITCH = "glitch"  # 글리치 렌더링 활성화


@dataclass(frozen=True)
class TimedEvent:
    turn: int
    effect: TimedEffect
    message: str
    amount: int = 0


DEFAULT_TIMED_EVENTS: tuple[TimedEvent, ...] = (
    TimedEvent(8, TimedEffect.WARNING, "Warning: System lockdown in 2 turns..."),
    TimedEvent(10, TimedEffect.LOCKDOWN, "*** SYSTEM LOCKDOWN ENGAGED ***"),
    TimedEvent(
        15,
        TimedEffect.SANITY_PENALTY,
        "*** POWER SURGE DETECTED *** Lights flicker wildly!",
        amount=10,
    ),
    TimedEvent(
        20,
        TimedEffect.GLITCH,
        "*** DATA CORRUPTION DETECTED *** SYNAPSE's responses may become erratic!",
    ),
)


@dataclass
class TimedEventSchedule:
    """턴 번호 → 이벤트 (정확 일치, 1회)"""

    events: Sequence[TimedEvent] = DEFAULT_TIMED_EVENTS
    fired: set[int] = field(default_factory=set)

    def __post_init__(self) -> None:
        self._by_turn: dict[int, TimedEvent] = {}
        for event in sorted(self.events, key=lambda e: e.turn):
            if event.turn in self._by_turn:
                raise ValueError(f"Two timed events on turn {event.turn}")
            self._by_turn[event.turn] = event

    def due(self, turn: int) -> Optional[TimedEvent]:
        """이번 턴에 발동할 이벤트. 발동 처리까지 함께 기록한다."""
        event = self._by_turn.get(turn)
        if event is None or turn in self.fired:
            return None
        self.fired.add(turn)
        logger.info("Timed event fired on turn %d: %s", turn, event.effect.value)
        return event

    def reset(self) -> None:
        self.fired.clear()
