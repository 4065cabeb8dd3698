"""SynapseEngine 세션 테스트"""

import pytest

from conftest import FixedRandom
from synapse.core.dialogue import ROOT_NODE_ID, ChoiceOutcome
from synapse.core.endings import (
    ASCENSION,
    LIBERATION,
    MADNESS,
    SEALED_FATE,
    SINGULARITY,
    TRUTH_UNVEILED,
)
from synapse.core.engine import SynapseEngine
from synapse.core.errors import SessionOverError
from synapse.core.event_types import EventTypes
from synapse.core.output import LineKind
from synapse.core.world import MoveOutcome, TakeOutcome, UseOutcome


def texts(lines) -> list[str]:
    return [line.text for line in lines]


class TestMovementScenario:
    """로비 → 서버실 → 잠긴 출구 → 열쇠 → 로비"""

    def test_server_closet_walkthrough(self, engine: SynapseEngine):
        result = engine.move("north")
        assert result.outcome == MoveOutcome.MOVED
        assert engine.world.current_room_id == "Server Closet"
        assert engine.resources.sanity == 100
        assert engine.show_exits()[0].text == "Exits: south"

        result = engine.move("south")
        assert result.outcome == MoveOutcome.LOCKED
        assert texts(result.lines) == ["The door is locked. A keycard is required."]
        assert engine.world.current_room_id == "Server Closet"

        assert engine.take_item("keycard").outcome == TakeOutcome.TAKEN
        assert engine.inventory == ["keycard"]

        result = engine.use_item("keycard")
        assert result.outcome == UseOutcome.EFFECT
        assert result.lines[0].text == "You used the keycard to unlock the door."
        assert engine.world.current_room_id == "Lobby"

    def test_room_entry_output(self, engine: SynapseEngine):
        lines = engine.move("west").lines
        assert texts(lines) == [
            "-- Laboratory --",
            "Strange experiments line the tables.",
            "Objects: vial",
            "Exits: east, north, west",
        ]
        assert lines[0].kind == LineKind.ROOM

    def test_no_exit(self, engine: SynapseEngine):
        result = engine.move("up")
        assert result.outcome == MoveOutcome.NO_EXIT
        assert texts(result.lines) == ["You can't go that way."]

    def test_visit_outcomes(self, engine: SynapseEngine):
        assert engine.visit("kitchen").outcome == MoveOutcome.NO_SUCH_ROOM
        result = engine.visit("ai core")
        assert result.outcome == MoveOutcome.NOT_ADJACENT
        assert texts(result.lines) == [
            "You can't directly visit 'AI Core' from here. Use 'exits' to see valid directions."
        ]
        assert engine.visit("laboratory").outcome == MoveOutcome.MOVED

    def test_ambient_sound(self):
        engine = SynapseEngine(rng=FixedRandom(0.1), auto_save_interval=0)
        lines = engine.move("west").lines
        assert lines[-1].kind == LineKind.AMBIENT


class TestSanity:
    def test_tunnel_without_flashlight(self, engine: SynapseEngine):
        engine.move("south")
        assert engine.resources.sanity == 90

    def test_tunnel_with_flashlight(self, engine: SynapseEngine):
        engine.move("south")
        engine.take_item("flashlight")
        engine.move("north")
        engine.move("south")
        assert engine.resources.sanity == 88

    def test_entry_effect_applied_once(self, engine: SynapseEngine):
        changes = []
        engine.bus.subscribe(EventTypes.SANITY_CHANGED, changes.append)
        engine.move("south")
        assert len(changes) == 1

    def test_low_sanity_warning(self, engine: SynapseEngine):
        engine.resources.sanity = 35
        lines = texts(engine.move("south").lines)
        assert "Your sanity is low... visions blur and whispers grow louder." in lines

    def test_sanity_zero_preempts_special_ending(self, engine: SynapseEngine):
        engine.world.current_room_id = "Control Room"
        engine.resources.sanity = 15
        engine.resources.awareness = 26
        engine.move("west")
        assert engine.resources.sanity == 0
        assert engine.ending == MADNESS

    def test_examine_altar_can_end_game(self, engine: SynapseEngine):
        engine.world.current_room_id = "Secret Chamber"
        engine.resources.sanity = 5
        lines = texts(engine.examine("altar").lines)
        assert engine.ending == MADNESS
        assert lines[-1] == "Game Over: Madness Consumes You."


class TestItems:
    def test_take_outcomes(self, engine: SynapseEngine):
        assert engine.take_item("keycard").outcome == TakeOutcome.WRONG_ROOM
        assert engine.take_item("banana").outcome == TakeOutcome.WRONG_ROOM
        engine.move("north")
        engine.take_item("keycard")
        objects = list(engine.world.current_room.objects)
        result = engine.take_item("keycard")
        assert result.outcome == TakeOutcome.ALREADY_HELD
        assert texts(result.lines) == ["You already have the keycard."]
        assert engine.inventory == ["keycard"]
        assert engine.world.current_room.objects == objects

    def test_use_not_held(self, engine: SynapseEngine):
        result = engine.use_item("flashlight")
        assert result.outcome == UseOutcome.NOT_HELD
        assert texts(result.lines) == ["You don't have a flashlight."]

    def test_use_no_effect(self, engine: SynapseEngine):
        engine.move("south")
        engine.take_item("flashlight")
        engine.move("north")
        result = engine.use_item("flashlight")
        assert result.outcome == UseOutcome.NO_EFFECT_HERE
        assert texts(result.lines) == ["You can't use the flashlight here."]

    def test_flashlight_reveals_panel_once(self, engine: SynapseEngine):
        engine.move("south")
        engine.take_item("flashlight")
        engine.use_item("flashlight")
        engine.use_item("flashlight")
        assert engine.world.current_room.objects.count("panel") == 1
        engine.examine("panel")
        assert engine.resources.awareness == 2

    def test_data_disk_reveals_logs(self, engine: SynapseEngine):
        engine.move("east")
        engine.take_item("data disk")
        lines = texts(engine.use_item("data disk").lines)
        assert lines[1].startswith("Log: 'SYNAPSE core directives altered")
        assert engine.resources.awareness == 3

    @pytest.mark.parametrize(
        "room, obj, awareness, sanity",
        [
            ("Laboratory", "vial", 2, 100),
            ("Archive Room", "records", 5, 100),
            ("AI Core", "core console", 5, 100),
            ("Secret Chamber", "altar", 0, 95),
            ("Observation Deck", "telescope", 0, 97),
            ("Lobby", "sign", 0, 100),
        ],
    )
    def test_examine_effects(self, engine: SynapseEngine, room, obj, awareness, sanity):
        engine.world.current_room_id = room
        engine.examine(obj)
        assert engine.resources.awareness == awareness
        assert engine.resources.sanity == sanity

    def test_examine_missing(self, engine: SynapseEngine):
        assert texts(engine.examine("vial").lines) == ["There is no vial to examine here."]


class TestSpecialEndings:
    def test_liberation(self, engine: SynapseEngine):
        engine.inventory.append("keycard")
        engine.world.current_room_id = "Laboratory"
        engine.move("north")
        assert engine.ending == LIBERATION

    def test_truth_unveiled(self, engine: SynapseEngine):
        engine.inventory.append("flashlight")
        engine.world.current_room_id = "Laboratory"
        engine.move("west")
        assert engine.ending == TRUTH_UNVEILED

    def test_ascension_needs_awareness(self, engine: SynapseEngine):
        engine.world.current_room_id = "Control Room"
        engine.resources.awareness = 24
        engine.move("west")
        assert engine.ending is None
        engine.world.current_room_id = "Control Room"
        engine.resources.awareness = 25
        engine.move("west")
        assert engine.ending == ASCENSION

    def test_singularity(self, engine: SynapseEngine):
        engine.inventory.append("keycard")
        engine.world.current_room_id = "Control Room"
        engine.resources.awareness = 30
        engine.move("east")
        assert engine.ending == SINGULARITY


class TestTurnPipeline:
    def test_turn_records_transcript_and_response(self, engine: SynapseEngine):
        result = engine.process_turn("  Look  ")
        assert result.turn == 1
        assert engine.transcript[0] == "Player: Look"
        assert engine.transcript[-1].startswith("SYNAPSE: Hello, I am SYNAPSE")
        assert result.response.endswith(" I'm here to guide you.")
        assert result.lines[-2].text == "[Debug] Awareness Level: 0 | Tone: calm | Sanity: 100"
        assert len(result.options) == 8

    def test_empty_input_does_not_advance_turn(self, engine: SynapseEngine):
        result = engine.process_turn("   ")
        assert result.turn == 0
        assert engine.resources.turn_count == 0
        assert engine.transcript == []

    def test_defiance_double_counts(self, engine: SynapseEngine):
        engine.process_turn("i doubt you")
        assert engine.resources.awareness == 3 + 5

    def test_state_line_can_be_hidden(self):
        engine = SynapseEngine(rng=FixedRandom(0.99), show_state_line=False, auto_save_interval=0)
        result = engine.process_turn("look")
        assert all(line.kind != LineKind.STATE for line in result.lines)

    def test_awareness_ceiling_ends_on_turn_boundary(self, engine: SynapseEngine):
        for _ in range(39):
            result = engine.process_turn("xyzzy")
            assert not result.ended
        assert engine.resources.awareness == 39

        result = engine.process_turn("xyzzy")
        assert result.ended
        assert result.ending == SEALED_FATE
        assert result.turn == 40
        # 응답까지 출력된 뒤 엔딩
        assert result.lines[-1].text == SEALED_FATE.title
        assert result.response is not None

    def test_no_commands_after_ending(self, engine: SynapseEngine):
        engine.resources.awareness = 39
        engine.process_turn("xyzzy")
        with pytest.raises(SessionOverError):
            engine.process_turn("look")
        with pytest.raises(SessionOverError):
            engine.choose(1)

    def test_room_ending_skips_rest_of_turn(self, engine: SynapseEngine):
        engine.inventory.append("keycard")
        engine.world.current_room_id = "Laboratory"
        result = engine.process_turn("go north")
        assert result.ending == LIBERATION
        assert result.response is None
        assert engine.transcript == ["Player: go north"]

    def test_quit_stops_turn(self, engine: SynapseEngine):
        result = engine.process_turn("quit")
        assert result.ended
        assert result.ending is None
        assert result.response is None

    def test_turn_processed_event_feeds_system_log(self, engine: SynapseEngine):
        engine.process_turn("hello")
        assert engine.system_log.entries[-1].endswith("Awareness=1, Tone=calm, Sanity=100")


class TestTimedEvents:
    def _advance(self, engine: SynapseEngine, turns: int):
        results = []
        for _ in range(turns):
            results.append(engine.process_turn("look"))
        return results

    def test_schedule(self, engine: SynapseEngine):
        results = self._advance(engine, 20)
        assert results[7].lines[0].text == "Warning: System lockdown in 2 turns..."
        assert results[9].lines[0].text == "*** SYSTEM LOCKDOWN ENGAGED ***"
        assert engine.resources.lockdown is True
        assert engine.resources.sanity == 90
        assert engine.resources.glitch_mode is True

    def test_power_surge_can_end_session(self, engine: SynapseEngine):
        self._advance(engine, 14)
        engine.resources.sanity = 10
        result = engine.process_turn("hello there")
        assert result.ending == MADNESS
        assert result.response is None
        # 14턴 x (입력 + 응답) + 15턴 입력, 15턴 응답은 없음
        assert len(engine.transcript) == 29
        assert engine.transcript[-1] == "Player: hello there"


class TestDialogue:
    def test_choose_records_transcript(self, engine: SynapseEngine):
        engine.process_turn("look")
        result = engine.choose(1)
        assert result.outcome == ChoiceOutcome.DESCENDED
        assert "Player chose: who are you?" in engine.transcript
        assert result.lines[0].text.startswith("I am SYNAPSE, your guide")
        assert result.data["can_go_back"] is True

        result = engine.choose(0)
        assert result.outcome == ChoiceOutcome.WENT_BACK
        assert engine.transcript[-2] == "Player chose to go back."

    def test_invalid_choice(self, engine: SynapseEngine):
        result = engine.choose(0)
        assert not result.success
        assert texts(result.lines) == ["Invalid choice."]


class TestPersistence:
    def test_save_load_round_trip(self, engine: SynapseEngine, tmp_path):
        from synapse.core.snapshot import FileSnapshotStore

        engine.snapshot_store = FileSnapshotStore(tmp_path / "save.txt")
        engine.move("north")
        engine.take_item("keycard")
        engine.resources.awareness = 14
        engine.resources.sanity = 61
        engine.resources.glitch_mode = True
        engine.choose(2)
        assert texts(engine.save_game().lines) == ["Game saved."]

        other = SynapseEngine(rng=FixedRandom(0.99), snapshot_store=engine.snapshot_store)
        result = other.load_game()
        assert result.success
        assert result.lines[0].text == "Game loaded."
        assert other.player_name == "Tester"
        assert other.resources.awareness == 14
        assert other.resources.sanity == 61
        assert other.resources.glitch_mode is True
        assert other.inventory == ["keycard"]
        assert other.world.current_room_id == "Server Closet"
        assert "keycard" not in other.world.current_room.objects
        assert other.dialogue.current.node_id == ROOT_NODE_ID

    def test_load_does_not_reapply_room_effects(self, engine: SynapseEngine, tmp_path):
        from synapse.core.snapshot import FileSnapshotStore

        engine.snapshot_store = FileSnapshotStore(tmp_path / "save.txt")
        engine.move("south")
        engine.save_game()
        engine.load_game()
        assert engine.resources.sanity == 90

    def test_load_failure_keeps_state(self, engine: SynapseEngine, tmp_path):
        from synapse.core.snapshot import FileSnapshotStore

        engine.snapshot_store = FileSnapshotStore(tmp_path / "missing.txt")
        engine.move("west")
        result = engine.load_game()
        assert texts(result.lines) == ["Failed to load game."]
        assert engine.world.current_room_id == "Laboratory"

    def test_unstorable_name_fails_save(self, engine: SynapseEngine, tmp_path):
        from synapse.core.snapshot import FileSnapshotStore

        path = tmp_path / "save.txt"
        engine.snapshot_store = FileSnapshotStore(path)
        engine.player_name = "Ann\x85Lee"
        assert texts(engine.save_game().lines) == ["Failed to save game."]
        assert not path.exists()

    def test_unknown_room_in_snapshot(self, engine: SynapseEngine, tmp_path):
        from synapse.core.snapshot import FileSnapshotStore

        path = tmp_path / "save.txt"
        path.write_text("Tester\n3\ncalm\n\nBasement\nFalse\n", encoding="utf-8")
        engine.snapshot_store = FileSnapshotStore(path)
        assert not engine.load_game().success
        assert engine.world.current_room_id == "Lobby"

    def test_auto_save_every_fifth_turn(self, tmp_path):
        from synapse.core.snapshot import FileSnapshotStore

        path = tmp_path / "auto.txt"
        engine = SynapseEngine(
            player_name="Tester",
            rng=FixedRandom(0.99),
            snapshot_store=FileSnapshotStore(path),
            auto_save_interval=5,
        )
        for _ in range(4):
            engine.process_turn("look")
        assert not path.exists()
        engine.process_turn("look")
        assert path.exists()
        assert engine.system_log.entries[-2].endswith("Auto-saved game.")

    def test_auto_save_failure_is_swallowed(self, tmp_path):
        from synapse.core.snapshot import FileSnapshotStore

        engine = SynapseEngine(
            rng=FixedRandom(0.99),
            snapshot_store=FileSnapshotStore(tmp_path / "no" / "such" / "dir.txt"),
            auto_save_interval=1,
        )
        result = engine.process_turn("look")
        assert not result.ended

    def test_write_transcript(self, engine: SynapseEngine, tmp_path):
        engine.process_turn("hello")
        path = tmp_path / "history.txt"
        assert engine.write_transcript(path)
        assert path.read_text(encoding="utf-8").splitlines()[0] == "Player: hello"
