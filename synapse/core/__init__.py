"""SYNAPSE Core Engine"""
__version__ = "0.1.0"

from synapse.core.world import WorldGraph, Room, LockSide, MoveOutcome, TakeOutcome, UseOutcome, ExamineOutcome
from synapse.core.resources import ResourceState, Tone, derive_tone
from synapse.core.dialogue import DialogueTree, DialogueNode, ChoiceOutcome
from synapse.core.endings import Ending, check_room_ending, check_vital_endings
from synapse.core.timed_events import TimedEvent, TimedEventSchedule
from synapse.core.snapshot import SessionSnapshot, FileSnapshotStore, DatabaseSnapshotStore
from synapse.core.errors import SynapseError, SnapshotError, SessionOverError
from synapse.core.output import ActionResult, OutputLine, LineKind
from synapse.core.engine import SynapseEngine, TurnResult
from synapse.core.tutorial import TutorialRunner, TutorialStep

__all__ = [
    "WorldGraph",
    "Room",
    "LockSide",
    "MoveOutcome",
    "TakeOutcome",
    "UseOutcome",
    "ExamineOutcome",
    "ResourceState",
    "Tone",
    "derive_tone",
    "DialogueTree",
    "DialogueNode",
    "ChoiceOutcome",
    "Ending",
    "check_room_ending",
    "check_vital_endings",
    "TimedEvent",
    "TimedEventSchedule",
    "SessionSnapshot",
    "FileSnapshotStore",
    "DatabaseSnapshotStore",
    "SynapseError",
    "SnapshotError",
    "SessionOverError",
    "ActionResult",
    "OutputLine",
    "LineKind",
    "SynapseEngine",
    "TurnResult",
    "TutorialRunner",
    "TutorialStep",
]
