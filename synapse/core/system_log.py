"""시스템 로그: 'cmd:access logs'로 플레이어가 볼 수 있는 기록

엔진 이벤트를 구독해서 타임스탬프가 붙은 줄을 쌓는다.
"""

from datetime import datetime
from typing import Callable

from synapse.core.event_bus import EventBus, GameEvent
from synapse.core.event_types import EventTypes


class SystemLog:
    def __init__(self, clock: Callable[[], datetime] = datetime.now) -> None:
        self._clock = clock
        self.entries: list[str] = []

    def record(self, text: str) -> None:
        self.entries.append(f"[{self._clock():%Y-%m-%d %H:%M:%S}] {text}")

    def attach(self, bus: EventBus) -> None:
        bus.subscribe(EventTypes.TURN_PROCESSED, self._on_turn_processed)
        bus.subscribe(EventTypes.TERMINAL_COMMAND, self._on_terminal_command)
        bus.subscribe(EventTypes.TIMED_EVENT_FIRED, self._on_timed_event)
        bus.subscribe(EventTypes.GAME_SAVED, self._on_game_saved)
        bus.subscribe(EventTypes.ENDING_REACHED, self._on_ending)

    def _on_turn_processed(self, event: GameEvent) -> None:
        data = event.data
        self.record(
            f"Awareness={data['awareness']}, Tone={data['tone']}, Sanity={data['sanity']}"
        )

    def _on_terminal_command(self, event: GameEvent) -> None:
        entry = event.data.get("log")
        if entry:
            self.record(entry)

    def _on_timed_event(self, event: GameEvent) -> None:
        self.record(f"Timed event on turn {event.data['turn']}: {event.data['effect']}")

    def _on_game_saved(self, event: GameEvent) -> None:
        if event.data.get("auto"):
            self.record("Auto-saved game.")

    def _on_ending(self, event: GameEvent) -> None:
        self.record(f"Session ended: {event.data['ending_id']}")
