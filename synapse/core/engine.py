"""
SYNAPSE Core Engine
===================
세션 컨트롤러: 월드 그래프, 자원, 인벤토리, 대화 트리, 예약 이벤트를
하나의 세션으로 묶고 턴 파이프라인을 실행한다.

턴 순서:
    턴 증가 → 예약 이벤트 → 입력 기록 → 명령 해석 → 반항 검사
    → 상태 줄 → SYNAPSE 응답 → 인식도 엔딩 → 자동 저장

코어는 출력을 직접 찍지 않고 OutputLine 목록을 돌려준다.
"""

import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from synapse.config import settings
from synapse.core.dialogue import ChoiceOutcome, DialogueTree
from synapse.core.endings import (
    Ending,
    check_room_ending,
    check_sanity_ending,
    check_vital_endings,
)
from synapse.core.errors import SessionOverError, SnapshotError
from synapse.core.event_bus import EventBus, GameEvent
from synapse.core.event_types import EventTypes
from synapse.core.flavor import ambient_sound, object_profile
from synapse.core.interpreter import CommandInterpreter
from synapse.core.logging import get_logger
from synapse.core.output import ActionResult, LineKind, OutputLine
from synapse.core.resources import ResourceState
from synapse.core.snapshot import SessionSnapshot, SnapshotStore
from synapse.core.system_log import SystemLog
from synapse.core.timed_events import TimedEffect, TimedEventSchedule
from synapse.core.world import (
    DISK_ITEM,
    HIDDEN_PANEL,
    ITEM_HOMES,
    KEY_ITEM,
    LIGHT_ITEM,
    ExamineOutcome,
    MoveOutcome,
    TakeOutcome,
    UseOutcome,
    WorldGraph,
)

logger = get_logger(__name__)

EMPTY_INPUT_TEXT = "Please enter a command."
LOW_SANITY_TEXT = "Your sanity is low... visions blur and whispers grow louder."
HIDDEN_LOG_TEXT = (
    "Log: 'SYNAPSE core directives altered on [REDACTED]. Unauthorized access detected.'"
)
DISK_AWARENESS = 3


@dataclass
class TurnResult:
    """한 턴 처리 결과"""

    turn: int
    lines: list[OutputLine] = field(default_factory=list)
    response: Optional[str] = None
    options: list[str] = field(default_factory=list)
    can_go_back: bool = False
    ended: bool = False
    ending: Optional[Ending] = None


class SynapseEngine:
    """
    SYNAPSE 세션

    콘솔 한 판 또는 HTTP 세션 하나가 엔진 인스턴스 하나다.
    무작위성은 모두 self.rng를 거친다.
    """

    VERSION = "0.1.0"

    def __init__(
        self,
        player_name: str = "",
        rng: Optional[random.Random] = None,
        snapshot_store: Optional[SnapshotStore] = None,
        auto_save_interval: int = settings.AUTO_SAVE_INTERVAL,
        show_state_line: bool = settings.SHOW_STATE_LINE,
    ):
        self.player_name = player_name
        self.rng = rng if rng is not None else random.Random(settings.RANDOM_SEED)
        self.snapshot_store = snapshot_store
        self.auto_save_interval = auto_save_interval
        self.show_state_line = show_state_line

        self.world = WorldGraph()
        self.resources = ResourceState()
        self.inventory: list[str] = []
        self.dialogue = DialogueTree()
        self.timed_events = TimedEventSchedule()
        self.transcript: list[str] = []

        self.bus = EventBus()
        self.system_log = SystemLog()
        self.system_log.attach(self.bus)

        self.ending: Optional[Ending] = None
        self.quit_requested = False
        self.interpreter = CommandInterpreter(self)

        logger.info("SynapseEngine v%s session created", self.VERSION)

    # === 상태 조회 ===

    @property
    def is_over(self) -> bool:
        return self.ending is not None or self.quit_requested

    def _emit(self, event_type: str, **data) -> None:
        self.bus.emit(GameEvent(event_type=event_type, data=data, source="engine"))

    def state_line(self) -> OutputLine:
        r = self.resources
        return OutputLine(
            f"[Debug] Awareness Level: {r.awareness} | Tone: {r.tone.value} | Sanity: {r.sanity}",
            LineKind.STATE,
        )

    # === 자원 ===

    def adjust_awareness(self, delta: int) -> int:
        return self._awareness_changed(self.resources.adjust_awareness(delta))

    def _awareness_changed(self, changed: int) -> int:
        if changed:
            self._emit(
                EventTypes.AWARENESS_CHANGED,
                delta=changed,
                awareness=self.resources.awareness,
            )
        return changed

    def reset_awareness(self) -> int:
        return self._awareness_changed(self.resources.reset_awareness())

    def adjust_sanity(self, delta: int) -> list[OutputLine]:
        """정신력 변경 후 곧바로 광기 엔딩 판정. 엔딩 줄이 있으면 반환."""
        changed = self.resources.adjust_sanity(delta)
        if changed:
            self._emit(EventTypes.SANITY_CHANGED, delta=changed, sanity=self.resources.sanity)
        ending = check_sanity_ending(self.resources)
        if ending is not None and self.ending is None:
            return self._reach_ending(ending)
        return []

    def _reach_ending(self, ending: Ending) -> list[OutputLine]:
        self.ending = ending
        logger.info("Ending reached: %s (turn %d)", ending.ending_id, self.resources.turn_count)
        self._emit(EventTypes.ENDING_REACHED, ending_id=ending.ending_id, fatal=ending.fatal)
        return [
            OutputLine(ending.prelude, LineKind.ENDING),
            OutputLine(ending.title, LineKind.ENDING),
        ]

    # === 월드 ===

    def describe_room(self, full: bool = True) -> list[OutputLine]:
        room = self.world.current_room
        if not full:
            return [OutputLine(room.description, LineKind.NARRATION)]
        lines = [
            OutputLine(f"-- {room.room_id} --", LineKind.ROOM),
            OutputLine(room.description, LineKind.NARRATION),
        ]
        if room.objects:
            lines.append(OutputLine(f"Objects: {', '.join(room.objects)}", LineKind.OBJECTS))
        lines.append(self._exits_line())
        return lines

    def _exits_line(self) -> OutputLine:
        return OutputLine(f"Exits: {', '.join(self.world.current_room.exits)}", LineKind.EXITS)

    def show_exits(self) -> list[OutputLine]:
        return [self._exits_line()]

    def begin(self) -> list[OutputLine]:
        """현재 방에 들어서며 세션 시작"""
        return self._enter_room(self.world.current_room_id)

    def _enter_room(self, room_id: str) -> list[OutputLine]:
        """방 진입: 묘사 → 정신력 효과 → 엔딩 → 환경음"""
        self.world.current_room_id = room_id
        lines = self.describe_room()

        changed = self.resources.apply_room_entry_effect(room_id, self.inventory)
        if changed:
            self._emit(EventTypes.SANITY_CHANGED, delta=changed, sanity=self.resources.sanity)
        if self.resources.sanity_low:
            lines.append(OutputLine(LOW_SANITY_TEXT, LineKind.WARNING))

        self._emit(EventTypes.PLAYER_MOVED, room=room_id)

        ending = check_sanity_ending(self.resources) or check_room_ending(
            room_id, self.inventory, self.resources.awareness
        )
        if ending is not None:
            lines.extend(self._reach_ending(ending))
            return lines

        sound = ambient_sound(self.rng)
        if sound:
            lines.append(OutputLine(sound, LineKind.AMBIENT))
        return lines

    def move(self, direction: str) -> ActionResult:
        outcome, target = self.world.check_passage(direction, self.inventory)
        if outcome == MoveOutcome.NO_EXIT:
            return ActionResult(
                False, "move", outcome, [OutputLine("You can't go that way.", LineKind.ERROR)]
            )
        if outcome == MoveOutcome.LOCKED:
            return ActionResult(
                False,
                "move",
                outcome,
                [OutputLine("The door is locked. A keycard is required.", LineKind.ERROR)],
                data={"room": target},
            )

        return ActionResult(True, "move", outcome, self._enter_room(target), data={"room": target})

    def visit(self, room_name: str) -> ActionResult:
        """방 이름으로 이동. 인접한 방이면 해당 방향으로 move 위임."""
        room_id = self.world.resolve_room_name(room_name)
        if room_id is None:
            return ActionResult(
                False,
                "visit",
                MoveOutcome.NO_SUCH_ROOM,
                [
                    OutputLine(
                        f"No room named '{room_name}' exists. Check the tutorial for valid rooms.",
                        LineKind.ERROR,
                    )
                ],
            )

        direction = self.world.current_room.direction_to(room_id)
        if direction is None:
            return ActionResult(
                False,
                "visit",
                MoveOutcome.NOT_ADJACENT,
                [
                    OutputLine(
                        f"You can't directly visit '{room_id}' from here. "
                        "Use 'exits' to see valid directions.",
                        LineKind.ERROR,
                    )
                ],
            )
        return self.move(direction)

    def take_item(self, item: str) -> ActionResult:
        """아이템 줍기. 검사 순서: 방 불일치 → 이미 보유 → 방에 없음"""
        not_here = ActionResult(
            False, "take", TakeOutcome.WRONG_ROOM, [OutputLine(f"No {item} here.", LineKind.ERROR)]
        )
        if ITEM_HOMES.get(item) != self.world.current_room_id:
            return not_here
        if item in self.inventory:
            return ActionResult(
                False,
                "take",
                TakeOutcome.ALREADY_HELD,
                [OutputLine(f"You already have the {item}.", LineKind.ERROR)],
            )
        if not self.world.has_object(item):
            return not_here

        self.inventory.append(item)
        self.world.current_room.objects.remove(item)
        self._emit(EventTypes.ITEM_TAKEN, item=item, room=self.world.current_room_id)
        return ActionResult(
            True, "take", TakeOutcome.TAKEN, [OutputLine(f"You pick up the {item}.", LineKind.SUCCESS)]
        )

    def use_item(self, item: str) -> ActionResult:
        if item not in self.inventory:
            return ActionResult(
                False, "use", UseOutcome.NOT_HELD, [OutputLine(f"You don't have a {item}.", LineKind.ERROR)]
            )

        room = self.world.current_room
        lines: list[OutputLine] = []
        if item == KEY_ITEM and room.requires_key and room.exits:
            lines.append(OutputLine(f"You used the {item} to unlock the door.", LineKind.SUCCESS))
            lines.extend(self.move(next(iter(room.exits))).lines)
        elif item == LIGHT_ITEM and room.room_id == "Maintenance Tunnel":
            lines.append(
                OutputLine(
                    "The flashlight illuminates the tunnel, revealing a hidden panel.",
                    LineKind.SUCCESS,
                )
            )
            if HIDDEN_PANEL not in room.objects:
                room.objects.append(HIDDEN_PANEL)
        elif item == DISK_ITEM and room.room_id == "Data Vault":
            lines.append(
                OutputLine("You insert the data disk, revealing hidden system logs.", LineKind.SUCCESS)
            )
            lines.append(OutputLine(HIDDEN_LOG_TEXT, LineKind.NARRATION))
            self.adjust_awareness(DISK_AWARENESS)
        else:
            return ActionResult(
                False,
                "use",
                UseOutcome.NO_EFFECT_HERE,
                [OutputLine(f"You can't use the {item} here.", LineKind.ERROR)],
            )

        self._emit(EventTypes.ITEM_USED, item=item, room=room.room_id)
        return ActionResult(True, "use", UseOutcome.EFFECT, lines)

    def examine(self, obj: str) -> ActionResult:
        if not self.world.has_object(obj):
            return ActionResult(
                False,
                "examine",
                ExamineOutcome.NOT_PRESENT,
                [OutputLine(f"There is no {obj} to examine here.", LineKind.ERROR)],
            )

        profile = object_profile(obj)
        lines = [OutputLine(profile.description, LineKind.NARRATION)]
        if profile.awareness:
            self.adjust_awareness(profile.awareness)
        if profile.sanity:
            lines.extend(self.adjust_sanity(profile.sanity))
        self._emit(EventTypes.OBJECT_EXAMINED, object=obj, room=self.world.current_room_id)
        return ActionResult(True, "examine", ExamineOutcome.DESCRIBED, lines)

    # === 정보 표시 ===

    def inventory_lines(self) -> list[OutputLine]:
        lines = [OutputLine("Inventory:", LineKind.INFO)]
        if not self.inventory:
            lines.append(OutputLine("(empty)", LineKind.INFO))
        else:
            lines.extend(OutputLine(f"- {item}", LineKind.INFO) for item in self.inventory)
        return lines

    def stats_lines(self) -> list[OutputLine]:
        r = self.resources
        return [
            OutputLine(f"Awareness Level: {r.awareness}", LineKind.SUCCESS),
            OutputLine(f"Tone: {r.tone.value}", LineKind.SUCCESS),
            OutputLine(f"Sanity Level: {r.sanity}", LineKind.SUCCESS),
        ]

    def history_lines(self) -> list[OutputLine]:
        lines = [OutputLine("--- Conversation History ---", LineKind.AMBIENT)]
        lines.extend(OutputLine(entry, LineKind.AMBIENT) for entry in self.transcript)
        lines.append(OutputLine("-----------------------------", LineKind.AMBIENT))
        return lines

    def toggle_glitch(self) -> list[OutputLine]:
        self.resources.glitch_mode = not self.resources.glitch_mode
        state = "enabled" if self.resources.glitch_mode else "disabled"
        return [OutputLine(f"Glitch mode {state}.", LineKind.TERMINAL)]

    # === 저장 / 로드 ===

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            player_name=self.player_name,
            awareness=self.resources.awareness,
            current_room=self.world.current_room_id,
            inventory=list(self.inventory),
            glitch_mode=self.resources.glitch_mode,
            sanity=self.resources.sanity,
        )

    def restore(self, snapshot: SessionSnapshot) -> None:
        """스냅샷 적용. 방 효과는 다시 적용하지 않는다.

        Raises:
            SnapshotError: 스냅샷의 방이 시설에 없을 때 (상태 변경 없음)
        """
        world = WorldGraph()
        if snapshot.current_room not in world.rooms:
            raise SnapshotError(f"Unknown room in snapshot: {snapshot.current_room!r}")

        world.current_room_id = snapshot.current_room
        inventory = list(dict.fromkeys(snapshot.inventory))
        world.remove_held_items(inventory)

        self.world = world
        self.inventory = inventory
        self.player_name = snapshot.player_name
        self.resources.awareness = snapshot.awareness
        self.resources.sanity = snapshot.sanity
        self.resources.glitch_mode = snapshot.glitch_mode
        self.dialogue.rebuild(self.player_name)

    def save_game(self) -> ActionResult:
        if self.snapshot_store is None:
            logger.warning("Save requested but no snapshot store is configured")
            return ActionResult(False, "save", None, [OutputLine("Failed to save game.", LineKind.ERROR)])
        try:
            self.snapshot_store.save(self.snapshot())
        except SnapshotError as e:
            logger.warning("Save failed: %s", e)
            return ActionResult(False, "save", None, [OutputLine("Failed to save game.", LineKind.ERROR)])
        self._emit(EventTypes.GAME_SAVED, auto=False)
        return ActionResult(True, "save", None, [OutputLine("Game saved.", LineKind.SUCCESS)])

    def load_game(self) -> ActionResult:
        failed = ActionResult(False, "load", None, [OutputLine("Failed to load game.", LineKind.ERROR)])
        if self.snapshot_store is None:
            logger.warning("Load requested but no snapshot store is configured")
            return failed
        try:
            self.restore(self.snapshot_store.load())
        except SnapshotError as e:
            logger.warning("Load failed: %s", e)
            return failed

        self._emit(EventTypes.GAME_LOADED, room=self.world.current_room_id)
        lines = [OutputLine("Game loaded.", LineKind.SUCCESS)]
        lines.extend(self.describe_room())
        return ActionResult(True, "load", None, lines)

    def auto_save(self) -> None:
        """조용한 자동 저장. 실패는 로그만 남긴다."""
        if self.snapshot_store is None:
            return
        try:
            self.snapshot_store.save(self.snapshot())
        except SnapshotError as e:
            logger.warning("Auto-save failed: %s", e)
            return
        self._emit(EventTypes.GAME_SAVED, auto=True)

    def write_transcript(self, path: str | Path) -> bool:
        try:
            Path(path).write_text("\n".join(self.transcript) + "\n", encoding="utf-8")
        except OSError as e:
            logger.warning("Cannot write transcript to %s: %s", path, e)
            return False
        return True

    # === 대화 ===

    def respond(self) -> str:
        """현재 대화 노드를 톤/정신력으로 꾸며 기록하고 반환"""
        self.dialogue.build(self.player_name)
        text = self.dialogue.render(self.resources.tone, self.resources.sanity)
        self.transcript.append(f"SYNAPSE: {text}")
        return text

    def dialogue_view(self) -> dict:
        return {"options": self.dialogue.options(), "can_go_back": self.dialogue.can_go_back}

    def choose(self, index: int) -> ActionResult:
        """대화 선택지 처리. 0 = 뒤로, 1..N = N번째 선택지

        Raises:
            SessionOverError: 이미 끝난 세션
        """
        if self.is_over:
            raise SessionOverError("Session is over")

        self.dialogue.build(self.player_name)
        outcome, label = self.dialogue.choose(index)
        if outcome == ChoiceOutcome.INVALID:
            return ActionResult(
                False, "dialogue", outcome, [OutputLine("Invalid choice.", LineKind.ERROR)],
                data=self.dialogue_view(),
            )

        if outcome == ChoiceOutcome.DESCENDED:
            self.transcript.append(f"Player chose: {label}")
        else:
            self.transcript.append("Player chose to go back.")
        response = self.respond()
        return ActionResult(
            True, "dialogue", outcome, [OutputLine(response, LineKind.SYNAPSE)],
            data=self.dialogue_view(),
        )

    # === 턴 ===

    def _fire_timed_event(self, turn: int) -> list[OutputLine]:
        event = self.timed_events.due(turn)
        if event is None:
            return []

        lines = [OutputLine(event.message, LineKind.WARNING)]
        if event.effect == TimedEffect.LOCKDOWN:
            self.resources.lockdown = True
        elif event.effect == TimedEffect.SANITY_PENALTY:
            lines.extend(self.adjust_sanity(-event.amount))
        elif event.effect == TimedEffect.GLITCH:
            self.resources.glitch_mode = True
        self._emit(EventTypes.TIMED_EVENT_FIRED, turn=turn, effect=event.effect.value)
        return lines

    def process_turn(self, raw: str) -> TurnResult:
        """입력 한 줄을 한 턴으로 처리

        빈 입력은 턴을 소비하지 않는다.

        Raises:
            SessionOverError: 엔딩에 도달했거나 종료한 세션
        """
        if self.is_over:
            raise SessionOverError("Session is over")

        text = raw.strip()
        if not text:
            return self._turn_result(
                self.resources.turn_count, [OutputLine(EMPTY_INPUT_TEXT, LineKind.ERROR)]
            )

        turn = self.resources.next_turn()
        self.transcript.append(f"Player: {text}")
        lines = self._fire_timed_event(turn)
        response: Optional[str] = None

        if not self.is_over:
            command = text.lower()
            lines.extend(self.interpreter.dispatch(command))

            if not self.is_over:
                lines.extend(self.interpreter.apply_consequences(command))
                if self.show_state_line:
                    lines.append(self.state_line())
                response = self.respond()
                lines.append(OutputLine(response, LineKind.SYNAPSE))

                ending = check_vital_endings(self.resources)
                if ending is not None:
                    lines.extend(self._reach_ending(ending))
                elif self.auto_save_interval and turn % self.auto_save_interval == 0:
                    self.auto_save()

        r = self.resources
        self._emit(
            EventTypes.TURN_PROCESSED,
            turn=turn,
            awareness=r.awareness,
            tone=r.tone.value,
            sanity=r.sanity,
        )
        self.bus.reset_chain()
        return self._turn_result(turn, lines, response)

    def _turn_result(
        self, turn: int, lines: list[OutputLine], response: Optional[str] = None
    ) -> TurnResult:
        view = self.dialogue_view()
        return TurnResult(
            turn=turn,
            lines=lines,
            response=response,
            options=view["options"],
            can_go_back=view["can_go_back"],
            ended=self.is_over,
            ending=self.ending,
        )

    # === 튜토리얼 ===

    def _reset_session(self) -> list[OutputLine]:
        self.world = WorldGraph()
        self.resources.reset()
        self.inventory.clear()
        self.timed_events.reset()
        self.dialogue.rebuild(self.player_name)
        return self._enter_room(self.world.current_room_id)

    def begin_tutorial(self) -> list[OutputLine]:
        """튜토리얼 시작: 로비에서 모든 상태 초기화"""
        logger.info("Tutorial started for %s", self.player_name or "<anonymous>")
        return self._reset_session()

    def end_tutorial(self) -> list[OutputLine]:
        """튜토리얼 종료: 다시 초기화하고 본 게임을 로비에서 시작"""
        logger.info("Tutorial finished, main session begins")
        return self._reset_session()
