"""
SYNAPSE Core - World Graph
==========================
Site-13 시설의 방/출구 그래프

방과 출구는 고정 데이터 테이블에서 만들어지며, 세션 동안 변하는 것은
각 방의 오브젝트 목록과 현재 위치뿐이다. 잠금 판정은 (그래프, 인벤토리)
만으로 결정된다 (숨은 "해결됨" 플래그 없음).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from synapse.core.logging import get_logger

logger = get_logger(__name__)

START_ROOM = "Lobby"
KEY_ITEM = "keycard"
LIGHT_ITEM = "flashlight"
DISK_ITEM = "data disk"
HIDDEN_PANEL = "panel"


class LockSide(str, Enum):
    """열쇠가 지키는 문의 방향"""

    ENTRY = "entry"  # 들어갈 때 필요 (Observation Deck, AI Core)
    EXIT = "exit"  # 나갈 때 필요 (Server Closet)


class MoveOutcome(str, Enum):
    MOVED = "moved"
    NO_EXIT = "no_exit"
    LOCKED = "locked"
    NO_SUCH_ROOM = "no_such_room"
    NOT_ADJACENT = "not_adjacent"


class TakeOutcome(str, Enum):
    TAKEN = "taken"
    WRONG_ROOM = "wrong_room"
    ALREADY_HELD = "already_held"


class UseOutcome(str, Enum):
    EFFECT = "effect"
    NOT_HELD = "not_held"
    NO_EFFECT_HERE = "no_effect_here"


class ExamineOutcome(str, Enum):
    DESCRIBED = "described"
    NOT_PRESENT = "not_present"


@dataclass
class Room:
    """방 하나

    exits는 선언 순서를 유지한다 ("use keycard"는 첫 번째 출구로 나간다).
    """

    room_id: str
    description: str
    exits: dict[str, str] = field(default_factory=dict)
    requires_key: bool = False
    lock_side: LockSide = LockSide.ENTRY
    objects: list[str] = field(default_factory=list)

    def locks_entry(self) -> bool:
        return self.requires_key and self.lock_side == LockSide.ENTRY

    def locks_exit(self) -> bool:
        return self.requires_key and self.lock_side == LockSide.EXIT

    def direction_to(self, target_id: str) -> Optional[str]:
        for direction, room_id in self.exits.items():
            if room_id == target_id:
                return direction
        return None


# (room_id, description, requires_key, lock_side, objects)
ROOM_TABLE: tuple[tuple[str, str, bool, LockSide, tuple[str, ...]], ...] = (
    (
        "Lobby",
        "A dimly lit lobby with flickering lights. Doors lead in multiple directions.",
        False, LockSide.ENTRY, ("sign",),
    ),
    (
        "Server Closet",
        "Racks of humming servers. A keycard reader guards the exit.",
        True, LockSide.EXIT, ("keycard",),
    ),
    (
        "Laboratory",
        "Strange experiments line the tables.",
        False, LockSide.ENTRY, ("vial",),
    ),
    (
        "Control Room",
        "Screens display code scrolling endlessly.",
        False, LockSide.ENTRY, ("terminal",),
    ),
    (
        "Secret Chamber",
        "An eerie chamber bathed in red light. Hidden secrets await.",
        False, LockSide.ENTRY, ("altar",),
    ),
    (
        "Maintenance Tunnel",
        "A dark, cramped tunnel with exposed wires. Visibility is low.",
        False, LockSide.ENTRY, ("flashlight",),
    ),
    (
        "Observation Deck",
        "A glass dome reveals a starry void outside. A sense of isolation permeates.",
        True, LockSide.ENTRY, ("telescope",),
    ),
    (
        "Archive Room",
        "Dust-covered files and old computers line the shelves. "
        "Secrets of SYNAPSE's past lie here.",
        False, LockSide.ENTRY, ("records",),
    ),
    (
        "Data Vault",
        "A fortified room with encrypted data archives glowing faintly.",
        False, LockSide.ENTRY, ("data disk",),
    ),
    (
        "AI Core",
        "The heart of SYNAPSE's processing, pulsing with unnatural energy.",
        True, LockSide.ENTRY, ("core console",),
    ),
)

# (from, direction, to): 대칭일 필요 없음
EXIT_TABLE: tuple[tuple[str, str, str], ...] = (
    ("Lobby", "north", "Server Closet"),
    ("Lobby", "east", "Data Vault"),
    ("Lobby", "south", "Maintenance Tunnel"),
    ("Lobby", "west", "Laboratory"),
    ("Server Closet", "south", "Lobby"),
    ("Laboratory", "east", "Lobby"),
    ("Laboratory", "north", "Control Room"),
    ("Laboratory", "west", "Archive Room"),
    ("Control Room", "south", "Laboratory"),
    ("Control Room", "east", "AI Core"),
    ("Control Room", "north", "Observation Deck"),
    ("Control Room", "west", "Secret Chamber"),
    ("Secret Chamber", "east", "Control Room"),
    ("Maintenance Tunnel", "north", "Lobby"),
    ("Observation Deck", "south", "Control Room"),
    ("Archive Room", "east", "Laboratory"),
    ("Data Vault", "west", "Lobby"),
    ("AI Core", "west", "Control Room"),
)

# 주울 수 있는 아이템 → 원래 놓인 방
ITEM_HOMES: dict[str, str] = {
    KEY_ITEM: "Server Closet",
    LIGHT_ITEM: "Maintenance Tunnel",
    DISK_ITEM: "Data Vault",
}


def normalize_room_name(text: str) -> str:
    """방 이름 비교용 정규화 (소문자 + 공백 제거)"""
    return text.lower().replace(" ", "")


def build_facility(
    room_table: Iterable[tuple] = ROOM_TABLE,
    exit_table: Iterable[tuple[str, str, str]] = EXIT_TABLE,
) -> dict[str, Room]:
    """테이블에서 방 딕셔너리 생성.

    Raises:
        ValueError: 출구가 존재하지 않는 방을 가리킬 때
    """
    rooms: dict[str, Room] = {}
    for room_id, description, requires_key, lock_side, objects in room_table:
        rooms[room_id] = Room(
            room_id=room_id,
            description=description,
            requires_key=requires_key,
            lock_side=lock_side,
            objects=list(objects),
        )

    for source, direction, target in exit_table:
        if source not in rooms or target not in rooms:
            raise ValueError(f"Exit references unknown room: {source} -{direction}-> {target}")
        rooms[source].exits[direction] = target

    logger.debug("Facility built: %d rooms, %d exits", len(rooms), sum(len(r.exits) for r in rooms.values()))
    return rooms


class WorldGraph:
    """
    방 그래프 + 현재 위치

    진입 부수효과(정신력, 엔딩, 묘사)는 엔진이 담당하고, 여기서는
    그래프 조회와 통행 가능 여부 판정만 한다.
    """

    def __init__(self, rooms: Optional[dict[str, Room]] = None, start_room: str = START_ROOM):
        self.rooms: dict[str, Room] = rooms if rooms is not None else build_facility()
        if start_room not in self.rooms:
            raise ValueError(f"Unknown start room: {start_room}")
        self.current_room_id: str = start_room

    @property
    def current_room(self) -> Room:
        return self.rooms[self.current_room_id]

    def exit_target(self, direction: str) -> Optional[str]:
        return self.current_room.exits.get(direction)

    def check_passage(self, direction: str, inventory: Iterable[str]) -> tuple[MoveOutcome, Optional[str]]:
        """현재 방에서 direction 방향으로 통행 가능한지 판정.

        Returns:
            (결과, 목표 방 ID). 실패 시 목표 방 ID는 막힌 방 또는 None.
        """
        target_id = self.exit_target(direction)
        if target_id is None:
            return MoveOutcome.NO_EXIT, None

        held = set(inventory)
        target = self.rooms[target_id]
        if KEY_ITEM not in held and (self.current_room.locks_exit() or target.locks_entry()):
            return MoveOutcome.LOCKED, target_id
        return MoveOutcome.MOVED, target_id

    def resolve_room_name(self, text: str) -> Optional[str]:
        """자유 입력 방 이름 → 방 ID. 일치하는 방이 없으면 None."""
        wanted = normalize_room_name(text)
        for room_id in self.rooms:
            if normalize_room_name(room_id) == wanted:
                return room_id
        return None

    def has_object(self, obj: str) -> bool:
        return obj in self.current_room.objects

    def remove_held_items(self, inventory: Iterable[str]) -> None:
        """보유 중인 아이템을 원래 방의 오브젝트 목록에서 제거 (로드 후 동기화)"""
        for item in inventory:
            home = ITEM_HOMES.get(item)
            if home and item in self.rooms[home].objects:
                self.rooms[home].objects.remove(item)
