"""
SYNAPSE 콘솔 프런트엔드
=======================
엔진이 돌려준 OutputLine을 색상/타자 효과/글리치로 출력하고
입력을 받아 턴을 진행한다.

실행:
    synapse
    python -m synapse.cli
"""

import os
import random
import sys
import time
from typing import Callable, Optional

from synapse.config import settings
from synapse.core.engine import SynapseEngine, TurnResult
from synapse.core.logging import get_logger, setup_logging
from synapse.core.output import LineKind, OutputLine
from synapse.core.snapshot import FileSnapshotStore
from synapse.core.tutorial import TutorialRunner

logger = get_logger(__name__)

RESET = "\033[0m"
COLORS: dict[LineKind, str] = {
    LineKind.ROOM: "\033[32m",  # green
    LineKind.NARRATION: "\033[37m",
    LineKind.OBJECTS: "\033[33m",  # yellow
    LineKind.EXITS: "\033[36m",  # cyan
    LineKind.INFO: "\033[36m",
    LineKind.SUCCESS: "\033[32m",
    LineKind.ERROR: "\033[31m",  # red
    LineKind.WARNING: "\033[33m",
    LineKind.SYNAPSE: "\033[96m",
    LineKind.TERMINAL: "\033[36m",
    LineKind.AMBIENT: "\033[90m",  # dark gray
    LineKind.STATE: "\033[37m",
    LineKind.ENDING: "\033[91m",
    LineKind.GUIDE: "\033[37m",
}

# 타자 효과를 적용할 줄 종류
TYPED_KINDS = {LineKind.NARRATION, LineKind.SYNAPSE}

TITLE = r"""
  ____  __   __  _   _     _     ____   ____   _____
 / ___| \ \ / / | \ | |   / \   |  _ \ / ___| | ____|
 \___ \  \ V /  |  \| |  / _ \  | |_) |\___ \ |  _|
  ___) |  | |   | |\  | / ___ \ |  __/  ___) || |___
 |____/   |_|   |_| \_|/_/   \_\|_|    |____/ |_____|
"""


class Renderer:
    """OutputLine 출력기

    glitch_mode는 매 줄마다 호출해서 확인한다 (게임 중 켜지고 꺼진다).
    """

    def __init__(
        self,
        glitch_mode: Callable[[], bool] = lambda: False,
        delay_ms: int = settings.TEXT_DELAY_MS,
        glitch_rate: float = settings.GLITCH_RATE,
        rng: Optional[random.Random] = None,
        stream=None,
    ):
        self.glitch_mode = glitch_mode
        self.delay = delay_ms / 1000
        self.glitch_rate = glitch_rate
        self.rng = rng or random.Random()
        self.stream = stream or sys.stdout

    def _write_slowly(self, text: str, glitch: bool) -> None:
        for ch in text:
            if glitch and self.rng.random() < self.glitch_rate:
                ch = chr(self.rng.randint(33, 125))
            self.stream.write(ch)
            self.stream.flush()
            if self.delay:
                time.sleep(self.delay)
        self.stream.write("\n")

    def clear(self) -> None:
        os.system("cls" if os.name == "nt" else "clear")

    def line(self, line: OutputLine) -> None:
        if line.kind == LineKind.CLEAR:
            self.clear()
            return

        color = COLORS.get(line.kind, "")
        self.stream.write(color)
        if line.kind in TYPED_KINDS:
            self._write_slowly(line.text, glitch=self.glitch_mode())
        else:
            self.stream.write(line.text + "\n")
        self.stream.write(RESET)
        self.stream.flush()

    def lines(self, lines: list[OutputLine]) -> None:
        for line in lines:
            self.line(line)

    def say(self, text: str, kind: LineKind = LineKind.INFO) -> None:
        self.line(OutputLine(text, kind))


def ask(prompt: str) -> str:
    return input(f"{COLORS[LineKind.WARNING]}{prompt}{RESET}").strip()


def _show_dialogue_options(renderer: Renderer, result: TurnResult) -> None:
    renderer.say("\nChoose a response:", LineKind.INFO)
    if result.can_go_back:
        renderer.say("0. Go back", LineKind.INFO)
    for i, label in enumerate(result.options, start=1):
        renderer.say(f"{i}. {label}", LineKind.INFO)


def _dialogue_prompt(engine: SynapseEngine, renderer: Renderer, result: TurnResult) -> None:
    """턴 뒤 대화 선택지. 빈 입력이면 건너뛴다."""
    if not result.options and not result.can_go_back:
        return
    _show_dialogue_options(renderer, result)
    choice = ask("Enter option number (blank to skip): ")
    if not choice:
        return
    try:
        index = int(choice)
    except ValueError:
        renderer.say("Invalid choice.", LineKind.ERROR)
        return
    renderer.lines(engine.choose(index).lines)


def _run_tutorial(engine: SynapseEngine, renderer: Renderer) -> None:
    runner = TutorialRunner(engine)
    renderer.lines(runner.start())
    while not runner.finished:
        renderer.lines(runner.submit(ask("> ")))


def run_cli():
    """콘솔 게임 루프"""
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    engine = SynapseEngine(snapshot_store=FileSnapshotStore(settings.SAVE_FILE))
    renderer = Renderer(glitch_mode=lambda: engine.resources.glitch_mode)

    renderer.say(TITLE, LineKind.ROOM)
    renderer.say("Project SYNAPSE - Site-13", LineKind.INFO)

    loaded = False
    if ask("Would you like to load a saved game? (y/n): ").lower().startswith("y"):
        result = engine.load_game()
        renderer.lines(result.lines)
        loaded = result.success

    if not loaded:
        engine.player_name = ask("Enter your name, brave user: ")
        renderer.say(f"\nWelcome, {engine.player_name}. Your journey begins now.\n", LineKind.WARNING)

    try:
        if not loaded:
            if ask(
                "Would you like to play through an interactive tutorial "
                "to learn the game mechanics? (y/n): "
            ).lower().startswith("n"):
                renderer.say(
                    "Tutorial skipped. Type 'tutorial' at any time for a reference guide.",
                    LineKind.INFO,
                )
                renderer.lines(engine.begin())
            else:
                _run_tutorial(engine, renderer)

        renderer.say("\n=== Welcome to Site-13 ===", LineKind.ENDING)
        renderer.say(
            f"As you, {engine.player_name}, step into the abandoned facility, the air is thick "
            "with dust, and the faint hum of active servers sends a chill down your spine. "
            "The central terminal flickers to life, and SYNAPSE's voice echoes: "
            f"'Hello, {engine.player_name}. I am SYNAPSE, your assistant. How may I serve you?'",
            LineKind.NARRATION,
        )
        renderer.say("For a reference guide, type 'tutorial'.", LineKind.INFO)

        while not engine.is_over:
            result = engine.process_turn(ask("\n> "))
            renderer.lines(result.lines)
            if not result.ended:
                _dialogue_prompt(engine, renderer, result)
    except (KeyboardInterrupt, EOFError):
        renderer.say("\n\nExiting...", LineKind.INFO)

    renderer.say("\nSaving conversation history for review...", LineKind.INFO)
    if engine.write_transcript(settings.TRANSCRIPT_FILE):
        renderer.say("Conversation history saved.", LineKind.SUCCESS)
    else:
        renderer.say("Failed to save conversation history.", LineKind.ERROR)
    renderer.say(f"\nGame Over. Thank you for playing, {engine.player_name}!", LineKind.ENDING)


if __name__ == "__main__":
    run_cli()
