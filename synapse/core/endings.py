"""엔딩 판정

두 시점에서 판정한다.
- 방 진입 직후: 정신력 0 (진입 효과 적용 직후) → 특수 엔딩 체크리스트 (첫 일치 우선)
- 턴 종료 시: 인식도 상한
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from synapse.core.resources import ResourceState
from synapse.core.world import KEY_ITEM, LIGHT_ITEM


@dataclass(frozen=True)
class Ending:
    ending_id: str
    title: str
    prelude: str
    fatal: bool


MADNESS = Ending(
    "madness",
    "Game Over: Madness Consumes You.",
    "Your mind shatters under SYNAPSE's influence...",
    fatal=True,
)
SEALED_FATE = Ending(
    "sealed_fate",
    "Your fate is sealed. No escape... Game Over.",
    "SYNAPSE's tone shatters...",
    fatal=True,
)
ASCENSION = Ending(
    "ascension",
    "Your humanity fades. Secret Ending: Ascension.",
    "As you step in, SYNAPSE merges with your mind...",
    fatal=False,
)
LIBERATION = Ending(
    "liberation",
    "Secret Ending: Liberation.",
    "You insert the keycard and unlock a hidden terminal...",
    fatal=False,
)
TRUTH_UNVEILED = Ending(
    "truth_unveiled",
    "Secret Ending: Truth Unveiled.",
    "The flashlight reveals hidden files about SYNAPSE's creation...",
    fatal=False,
)
SINGULARITY = Ending(
    "singularity",
    "Secret Ending: Singularity Achieved.",
    "The AI Core pulses violently, syncing with your thoughts...",
    fatal=False,
)


@dataclass(frozen=True)
class EndingRule:
    """방 + (아이템 보유 또는 인식도 하한) 조건"""

    room_id: str
    ending: Ending
    required_item: Optional[str] = None
    min_awareness: Optional[int] = None

    def matches(self, room_id: str, inventory: set[str], awareness: int) -> bool:
        if room_id != self.room_id:
            return False
        if self.required_item is not None and self.required_item not in inventory:
            return False
        if self.min_awareness is not None and awareness < self.min_awareness:
            return False
        return True


# 순서가 곧 우선순위
SPECIAL_ENDING_RULES: tuple[EndingRule, ...] = (
    EndingRule("Secret Chamber", ASCENSION, min_awareness=25),
    EndingRule("Control Room", LIBERATION, required_item=KEY_ITEM),
    EndingRule("Archive Room", TRUTH_UNVEILED, required_item=LIGHT_ITEM),
    EndingRule("AI Core", SINGULARITY, min_awareness=30),
)


def check_room_ending(
    room_id: str,
    inventory: Iterable[str],
    awareness: int,
    rules: Sequence[EndingRule] = SPECIAL_ENDING_RULES,
) -> Optional[Ending]:
    held = set(inventory)
    for rule in rules:
        if rule.matches(room_id, held, awareness):
            return rule.ending
    return None


def check_sanity_ending(resources: ResourceState) -> Optional[Ending]:
    return MADNESS if resources.sanity_depleted else None


def check_awareness_ending(resources: ResourceState) -> Optional[Ending]:
    return SEALED_FATE if resources.awareness_critical else None


def check_vital_endings(resources: ResourceState) -> Optional[Ending]:
    """정신력 0 → 인식도 상한 순으로 치명 엔딩 판정"""
    return check_sanity_ending(resources) or check_awareness_ending(resources)
