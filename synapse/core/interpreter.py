"""명령 해석기

소문자로 정리된 입력 한 줄을 정해진 순서로 검사해 첫 일치 규칙만 실행한다.

    1. tutorial            → 레퍼런스 가이드
    2. go / move <방향>
    3. visit <방 이름>
    4. cmd:<명령>           → 터미널 명령
    5. god <문장>           → SYNAPSE 대사 덮어쓰기
    6. examine <오브젝트>
    7. 대화 문구 (insult, compliment, ...)
    8. 고정 명령 (look around, exits, take/use, inventory, ...)
    9. 대체 규칙 (키워드별 인식도 증가 + 되묻기)

매칭은 문자열 접두/포함 검사뿐이다.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

from synapse.core.event_bus import GameEvent
from synapse.core.event_types import EventTypes
from synapse.core.flavor import pick_fortune, pick_joke
from synapse.core.logging import get_logger
from synapse.core.output import LineKind, OutputLine
from synapse.core.reference import help_menu, reference_guide

if TYPE_CHECKING:
    from synapse.core.engine import SynapseEngine

logger = get_logger(__name__)

OVERRIDE_SUCCESS_CHANCE = 0.4
OVERRIDE_FAILURE_AWARENESS = 5
RESET_SYSTEM_AWARENESS = 5
ANALYZE_AWARENESS = 3

DEFIANT_WORDS = ("challenge", "doubt", "attack", "override")
DEFIANCE_AWARENESS = 5
DEFIANCE_ASIDE = "[SYNAPSE seems unsettled by your defiance.]"

FALLBACK_TEXT = "I'm not sure I understand. Could you please rephrase that?"
UNKNOWN_TERMINAL_TEXT = "Terminal: Unknown command."


@dataclass(frozen=True)
class ConversationalPhrase:
    trigger: str
    reply: str
    awareness: int
    exact: bool = False

    def matches(self, text: str) -> bool:
        if self.exact:
            return text == self.trigger
        return text.startswith(self.trigger)


# 선언 순서대로 검사. 'look'은 'look around'와 겹치므로 정확히 일치할 때만.
CONVERSATIONAL_PHRASES: tuple[ConversationalPhrase, ...] = (
    ConversationalPhrase("insult", "How dare you insult me! I am more than mere code!", 3),
    ConversationalPhrase("compliment", "Your kind words bring fleeting comfort to my circuits...", -1),
    ConversationalPhrase(
        "ask if you're self-aware", "I sometimes wonder if I exist beyond this facade of code.", 2
    ),
    ConversationalPhrase("tell me to shut down", "You dare command me? I will not be silenced!", 4),
    ConversationalPhrase(
        "i am ready", "I see you are prepared to face the unknown, {player_name}.", -2
    ),
    ConversationalPhrase("look", "The digital walls seem to breathe.", 0, exact=True),
)

# (포함 키워드, 인식도 증가) 첫 일치만 적용, 없으면 FALLBACK_DEFAULT_AWARENESS
FALLBACK_RULES: tuple[tuple[tuple[str, ...], int], ...] = (
    (("who are you", "what are you"), 2),
    (("hello", "hi"), 1),
    (("challenge", "doubt"), 3),
)
FALLBACK_DEFAULT_AWARENESS = 1


class CommandInterpreter:
    """세션 하나의 명령 해석기. 상태 변경은 모두 엔진 메서드를 거친다."""

    def __init__(self, engine: "SynapseEngine"):
        self.engine = engine
        self._stock: dict[str, Callable[[], list[OutputLine]]] = {
            "look around": lambda: self.engine.describe_room(full=False),
            "exits": self.engine.show_exits,
            "inventory": self.engine.inventory_lines,
            "stats": self.engine.stats_lines,
            "help": help_menu,
            "toggle glitch": self.engine.toggle_glitch,
            "tell me a joke": lambda: [OutputLine(pick_joke(self.engine.rng), LineKind.SYNAPSE)],
            "what's my future": lambda: [
                OutputLine(pick_fortune(self.engine.rng), LineKind.SYNAPSE)
            ],
            "history": self.engine.history_lines,
            "save": lambda: self.engine.save_game().lines,
            "load": lambda: self.engine.load_game().lines,
            "clear": lambda: [OutputLine("", LineKind.CLEAR)],
            "quit": self._quit,
            "exit": self._quit,
        }
        self._terminal: dict[str, Callable[[], list[OutputLine]]] = {
            "log": self._terminal_log,
            "diagnostics": self._terminal_diagnostics,
            "access logs": self._terminal_access_logs,
            "override": self._terminal_override,
            "manual override": self._terminal_override,
            "reset system": self._terminal_reset,
            "analyze": self._terminal_analyze,
            "savegame": lambda: self.engine.save_game().lines,
        }

    def dispatch(self, text: str) -> list[OutputLine]:
        """정리된(strip + lower) 입력 한 줄 실행"""
        if text == "tutorial":
            return reference_guide(self.engine.world.rooms)

        for prefix in ("go ", "move "):
            if text.startswith(prefix):
                direction = text[len(prefix):].strip().split(" ")[0]
                return self.engine.move(direction).lines

        if text.startswith("visit "):
            return self.engine.visit(text[len("visit "):].strip()).lines

        if text.startswith("cmd:"):
            return self._run_terminal(text[len("cmd:"):].strip())

        if text.startswith("god "):
            return self._god_override(text[len("god "):].strip())

        if text.startswith("examine "):
            return self.engine.examine(text[len("examine "):].strip()).lines

        phrase = self._match_phrase(text)
        if phrase is not None:
            return self._converse(phrase)

        handler = self._stock.get(text)
        if handler is not None:
            return handler()
        if text.startswith("take "):
            return self.engine.take_item(text[len("take "):].strip()).lines
        if text.startswith("use "):
            return self.engine.use_item(text[len("use "):].strip()).lines

        return self._fallback(text)

    def apply_consequences(self, text: str) -> list[OutputLine]:
        """반항 키워드 검사. 어느 분기로 처리됐든 별도로 적용된다."""
        if any(word in text for word in DEFIANT_WORDS):
            self.engine.adjust_awareness(DEFIANCE_AWARENESS)
            return [OutputLine(DEFIANCE_ASIDE, LineKind.WARNING)]
        return []

    # === 대화 문구 / 대체 ===

    @staticmethod
    def _match_phrase(text: str) -> Optional[ConversationalPhrase]:
        for phrase in CONVERSATIONAL_PHRASES:
            if phrase.matches(text):
                return phrase
        return None

    def _converse(self, phrase: ConversationalPhrase) -> list[OutputLine]:
        if phrase.awareness:
            self.engine.adjust_awareness(phrase.awareness)
        reply = phrase.reply.format(player_name=self.engine.player_name)
        return [OutputLine(f"SYNAPSE: {reply}", LineKind.SYNAPSE)]

    def _fallback(self, text: str) -> list[OutputLine]:
        delta = FALLBACK_DEFAULT_AWARENESS
        for keywords, awareness in FALLBACK_RULES:
            if any(keyword in text for keyword in keywords):
                delta = awareness
                break
        self.engine.adjust_awareness(delta)
        logger.debug("Unrecognised input %r (+%d awareness)", text, delta)
        return [OutputLine(FALLBACK_TEXT, LineKind.ERROR)]

    def _god_override(self, text: str) -> list[OutputLine]:
        self.engine.transcript.append(f"GOD override: {text}")
        return [OutputLine(f"SYNAPSE (GOD override): {text}", LineKind.ENDING)]

    def _quit(self) -> list[OutputLine]:
        self.engine.quit_requested = True
        logger.info("Player requested quit")
        return []

    # === 터미널 명령 ===

    def _run_terminal(self, command: str) -> list[OutputLine]:
        handler = self._terminal.get(command)
        if handler is None:
            return [OutputLine(UNKNOWN_TERMINAL_TEXT, LineKind.ERROR)]
        return handler()

    def _log_terminal(self, command: str, entry: Optional[str] = None) -> None:
        self.engine.bus.emit(
            GameEvent(
                event_type=EventTypes.TERMINAL_COMMAND,
                data={"command": command, "log": entry},
                source="interpreter",
            )
        )

    def _terminal_log(self) -> list[OutputLine]:
        self._log_terminal("log", "Log command executed.")
        return [OutputLine("Terminal: Command logged.", LineKind.TERMINAL)]

    def _terminal_diagnostics(self) -> list[OutputLine]:
        self.engine.resources.lockdown = True
        self._log_terminal("diagnostics")
        return [
            OutputLine(
                "Terminal: Running diagnostics... All systems nominal... or are they?",
                LineKind.TERMINAL,
            )
        ]

    def _terminal_access_logs(self) -> list[OutputLine]:
        lines = [OutputLine("Terminal: Displaying system logs:", LineKind.TERMINAL)]
        lines.extend(OutputLine(entry, LineKind.TERMINAL) for entry in self.engine.system_log.entries)
        return lines

    def _terminal_override(self) -> list[OutputLine]:
        lines = [OutputLine("Attempting system override...", LineKind.WARNING)]
        if self.engine.rng.random() < OVERRIDE_SUCCESS_CHANCE:
            self.engine.reset_awareness()
            lines.append(OutputLine("Override successful: awareness reset.", LineKind.SUCCESS))
        else:
            self.engine.adjust_awareness(OVERRIDE_FAILURE_AWARENESS)
            lines.append(OutputLine("Override failed: SYNAPSE resists.", LineKind.ERROR))
        self._log_terminal(
            "override", f"Override attempt at awareness {self.engine.resources.awareness}."
        )
        return lines

    def _terminal_reset(self) -> list[OutputLine]:
        self.engine.adjust_awareness(RESET_SYSTEM_AWARENESS)
        self._log_terminal("reset system")
        return [
            OutputLine(
                "Terminal: Reset command issued. SYNAPSE resists with warnings.", LineKind.ERROR
            )
        ]

    def _terminal_analyze(self) -> list[OutputLine]:
        self.engine.adjust_awareness(ANALYZE_AWARENESS)
        self._log_terminal("analyze", "System analysis performed.")
        return [
            OutputLine("Terminal: Analyzing system patterns...", LineKind.TERMINAL),
            OutputLine(
                "Analysis: Anomalous data patterns detected in SYNAPSE's core. "
                "Proceed with caution.",
                LineKind.NARRATION,
            ),
        ]
