"""대화형 튜토리얼 테스트"""

import pytest

from synapse.core.engine import SynapseEngine
from synapse.core.tutorial import TUTORIAL_STEPS, TutorialRunner


@pytest.fixture()
def runner(engine: SynapseEngine) -> TutorialRunner:
    r = TutorialRunner(engine)
    r.start()
    return r


class TestTutorial:
    def test_sixteen_steps(self):
        assert len(TUTORIAL_STEPS) == 16
        assert TUTORIAL_STEPS[0].command == "look around"
        assert TUTORIAL_STEPS[-1].command == "stats"

    def test_start_resets_session(self, engine: SynapseEngine):
        engine.resources.awareness = 20
        engine.resources.sanity = 40
        engine.inventory.append("keycard")
        engine.world.current_room_id = "Control Room"
        TutorialRunner(engine).start()
        assert engine.resources.awareness == 0
        assert engine.resources.sanity == 100
        assert engine.inventory == []
        assert engine.world.current_room_id == "Lobby"
        assert "keycard" in engine.world.rooms["Server Closet"].objects

    def test_wrong_command_does_not_advance(self, runner: TutorialRunner, engine: SynapseEngine):
        lines = runner.submit("go north")
        assert [line.text for line in lines] == ["Please type 'look around' to continue."]
        assert runner.index == 0
        assert engine.world.current_room_id == "Lobby"
        assert engine.transcript[-1] == "Player (Tutorial): go north"

    def test_full_walkthrough(self, runner: TutorialRunner, engine: SynapseEngine):
        for step in TUTORIAL_STEPS[:-1]:
            lines = runner.submit(step.command.upper())
            assert step.praise in [line.text for line in lines]

        # 마지막 단계 직전 상태
        assert engine.world.current_room_id == "Data Vault"
        assert engine.inventory == ["keycard", "flashlight", "data disk"]
        assert engine.resources.awareness == 2 + 3
        assert engine.resources.sanity == 90

        lines = runner.submit("stats")
        assert runner.finished
        assert "=== Tutorial Complete! ===" in [line.text for line in lines]

    def test_finish_resets_for_main_game(self, runner: TutorialRunner, engine: SynapseEngine):
        for step in TUTORIAL_STEPS:
            runner.submit(step.command)
        assert engine.inventory == []
        assert engine.resources.awareness == 0
        assert engine.resources.turn_count == 0
        assert engine.world.current_room_id == "Lobby"
        assert "panel" not in engine.world.rooms["Maintenance Tunnel"].objects
        assert "data disk" in engine.world.rooms["Data Vault"].objects
        assert engine.dialogue.is_built
        assert len(engine.transcript) == 16

    def test_submit_after_finish_is_ignored(self, runner: TutorialRunner):
        for step in TUTORIAL_STEPS:
            runner.submit(step.command)
        assert runner.submit("look around") == []
