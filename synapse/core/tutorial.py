"""대화형 튜토리얼

정해진 명령을 정확히 입력해야 다음 단계로 넘어간다. 시작과 끝에
세션 상태를 모두 초기화하므로 튜토리얼에서 주운 아이템은 본 게임에 남지 않는다.
"""

from dataclasses import dataclass

from synapse.core.engine import SynapseEngine
from synapse.core.output import LineKind, OutputLine


@dataclass(frozen=True)
class TutorialStep:
    title: str
    instruction: str
    command: str
    praise: str


TUTORIAL_STEPS: tuple[TutorialStep, ...] = (
    TutorialStep(
        "Look around the room",
        "Type 'look around' to view the room's description.",
        "look around",
        "Good! You viewed the room's description.",
    ),
    TutorialStep(
        "Check available exits",
        "Type 'exits' to see where you can go.",
        "exits",
        "Nice! You listed the available exits.",
    ),
    TutorialStep(
        "Move to another room",
        "Type 'go north' to move to the Server Closet.",
        "go north",
        "Well done! You've moved to the Server Closet.",
    ),
    TutorialStep(
        "Examine an object",
        "Type 'examine keycard' to inspect the keycard in this room.",
        "examine keycard",
        "Great! You examined the keycard.",
    ),
    TutorialStep(
        "Pick up an item",
        "Type 'take keycard' to add the keycard to your inventory.",
        "take keycard",
        "Excellent! The keycard is now in your inventory.",
    ),
    TutorialStep(
        "Check your inventory",
        "Type 'inventory' to see your items.",
        "inventory",
        "Good job! You checked your inventory.",
    ),
    TutorialStep(
        "Use an item",
        "Type 'use keycard' to unlock the door and move back to the Lobby.",
        "use keycard",
        "Perfect! You used the keycard to unlock the door and moved back to the Lobby.",
    ),
    TutorialStep(
        "Move to the Maintenance Tunnel",
        "Type 'go south' to move to the Maintenance Tunnel.",
        "go south",
        "Well done! You've moved to the Maintenance Tunnel.",
    ),
    TutorialStep(
        "Pick up the flashlight",
        "Type 'take flashlight' to add the flashlight to your inventory.",
        "take flashlight",
        "Excellent! The flashlight is now in your inventory.",
    ),
    TutorialStep(
        "Use the flashlight",
        "Type 'use flashlight' to illuminate the Maintenance Tunnel and reveal a hidden panel.",
        "use flashlight",
        "Great! You used the flashlight to reveal a hidden panel.",
    ),
    TutorialStep(
        "Examine the hidden panel",
        "Type 'examine panel' to inspect the hidden panel.",
        "examine panel",
        "Nice! You examined the hidden panel.",
    ),
    TutorialStep(
        "Return to the Lobby",
        "Type 'go north' to return to the Lobby.",
        "go north",
        "You're back in the Lobby.",
    ),
    TutorialStep(
        "Move to the Data Vault",
        "Type 'go east' to move to the Data Vault.",
        "go east",
        "Well done! You've moved to the Data Vault.",
    ),
    TutorialStep(
        "Pick up the data disk",
        "Type 'take data disk' to add the data disk to your inventory.",
        "take data disk",
        "Excellent! The data disk is now in your inventory.",
    ),
    TutorialStep(
        "Use the data disk",
        "Type 'use data disk' to reveal hidden logs.",
        "use data disk",
        "Great! You used the data disk to reveal hidden logs.",
    ),
    TutorialStep(
        "Check your stats",
        "Type 'stats' to view your awareness, tone, and sanity levels.",
        "stats",
        "Nice! You checked your stats.",
    ),
)


class TutorialRunner:
    """
    튜토리얼 진행기

    사용 패턴:
        runner = TutorialRunner(engine)
        lines = runner.start()
        while not runner.finished:
            lines = runner.submit(input())
    """

    def __init__(self, engine: SynapseEngine, steps: tuple[TutorialStep, ...] = TUTORIAL_STEPS):
        self.engine = engine
        self.steps = steps
        self.index = 0

    @property
    def finished(self) -> bool:
        return self.index >= len(self.steps)

    @property
    def current_step(self) -> TutorialStep:
        return self.steps[self.index]

    def _prompt(self) -> list[OutputLine]:
        step = self.current_step
        return [
            OutputLine(f"Step {self.index + 1}: {step.title}", LineKind.WARNING),
            OutputLine(step.instruction, LineKind.NARRATION),
        ]

    def start(self) -> list[OutputLine]:
        self.index = 0
        lines = [
            OutputLine("=== Interactive Tutorial ===", LineKind.INFO),
            OutputLine(
                "Welcome to SYNAPSE! This tutorial will guide you through the core mechanics. "
                "Follow the instructions and type the commands exactly as shown.",
                LineKind.NARRATION,
            ),
        ]
        lines.extend(self.engine.begin_tutorial())
        lines.extend(self._prompt())
        return lines

    def submit(self, raw: str) -> list[OutputLine]:
        """입력 한 줄 처리. 정확히 일치해야 다음 단계로 넘어간다."""
        if self.finished:
            return []

        text = raw.strip().lower()
        self.engine.transcript.append(f"Player (Tutorial): {text}")
        step = self.current_step
        if text != step.command:
            return [OutputLine(f"Please type '{step.command}' to continue.", LineKind.ERROR)]

        lines = self.engine.interpreter.dispatch(text)
        lines.append(OutputLine(step.praise, LineKind.SUCCESS))
        self.index += 1
        if self.finished:
            lines.extend(self._finish())
        else:
            lines.extend(self._prompt())
        return lines

    def _finish(self) -> list[OutputLine]:
        lines = [
            OutputLine("=== Tutorial Complete! ===", LineKind.INFO),
            OutputLine(
                "You've learned the basics! Type 'tutorial' for a reference guide, "
                "or continue exploring.",
                LineKind.NARRATION,
            ),
        ]
        lines.extend(self.engine.end_tutorial())
        return lines
