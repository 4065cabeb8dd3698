"""자원 모델: 인식도(awareness), 정신력(sanity), 턴 수, 톤

톤은 저장하지 않는다. 필요할 때마다 인식도에서 다시 계산한다.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from synapse.core.world import LIGHT_ITEM

AWARENESS_CEILING = 40  # 도달 시 턴 종료 시점에 치명 엔딩
SANITY_MAX = 100
LOW_SANITY_THRESHOLD = 30

CALM_LIMIT = 10
AMBIGUOUS_LIMIT = 20


class Tone(str, Enum):
    """SYNAPSE 말투"""

    CALM = "calm"
    AMBIGUOUS = "ambiguous"
    HOSTILE = "hostile"


def derive_tone(awareness: int) -> Tone:
    """인식도 → 톤 (순수 함수)"""
    if awareness < CALM_LIMIT:
        return Tone.CALM
    if awareness < AMBIGUOUS_LIMIT:
        return Tone.AMBIGUOUS
    return Tone.HOSTILE


# 방 진입 시 정신력 변화: room_id → (기본값, 손전등 보유 시 값)
ROOM_SANITY_EFFECTS: dict[str, tuple[int, int]] = {
    "Maintenance Tunnel": (-10, -2),
    "Secret Chamber": (-15, -15),
    "Observation Deck": (-5, -5),
    "AI Core": (-10, -10),
}


def room_entry_sanity_delta(room_id: str, inventory: Iterable[str]) -> int:
    base, lit = ROOM_SANITY_EFFECTS.get(room_id, (0, 0))
    return lit if LIGHT_ITEM in set(inventory) else base


@dataclass
class ResourceState:
    awareness: int = 0
    sanity: int = SANITY_MAX
    turn_count: int = 0
    glitch_mode: bool = False
    lockdown: bool = False

    @property
    def tone(self) -> Tone:
        return derive_tone(self.awareness)

    @property
    def sanity_low(self) -> bool:
        return self.sanity < LOW_SANITY_THRESHOLD

    @property
    def sanity_depleted(self) -> bool:
        return self.sanity == 0

    @property
    def awareness_critical(self) -> bool:
        return self.awareness >= AWARENESS_CEILING

    def adjust_awareness(self, delta: int) -> int:
        """인식도 조정. 0 미만으로 내려가지 않는다 (상한 클램프 없음).

        Returns:
            실제 변화량
        """
        before = self.awareness
        self.awareness = max(self.awareness + delta, 0)
        return self.awareness - before

    def reset_awareness(self) -> int:
        return self.adjust_awareness(-self.awareness)

    def adjust_sanity(self, delta: int) -> int:
        """정신력 조정. 0..SANITY_MAX 범위로 클램프.

        Returns:
            실제 변화량
        """
        before = self.sanity
        self.sanity = min(max(self.sanity + delta, 0), SANITY_MAX)
        return self.sanity - before

    def apply_room_entry_effect(self, room_id: str, inventory: Iterable[str]) -> int:
        """방 진입 정신력 효과 적용. 실제 변화량 반환."""
        return self.adjust_sanity(room_entry_sanity_delta(room_id, inventory))

    def next_turn(self) -> int:
        self.turn_count += 1
        return self.turn_count

    def reset(self) -> None:
        """튜토리얼/본 게임 시작 시 전체 초기화"""
        self.awareness = 0
        self.sanity = SANITY_MAX
        self.turn_count = 0
        self.glitch_mode = False
        self.lockdown = False
