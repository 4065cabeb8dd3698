"""도움말 메뉴와 레퍼런스 가이드 ('help', 'tutorial' 명령)

방 안내 섹션은 방/출구 테이블에서 만들어 데이터와 어긋나지 않게 한다.
"""

from synapse.core.output import LineKind, OutputLine
from synapse.core.resources import ROOM_SANITY_EFFECTS
from synapse.core.world import Room

HELP_ENTRIES: tuple[tuple[str, str], ...] = (
    ("go [direction]", "Move to another room (e.g., 'go north')"),
    ("visit [room]", "Move to a connected room (e.g., 'visit server closet')"),
    ("look around", "View current room description"),
    ("exits", "List available exits"),
    ("examine [object]", "Inspect objects (e.g., 'examine terminal')"),
    ("take [item]", "Pick up items (e.g., 'take keycard', 'take flashlight', 'take data disk')"),
    ("use [item]", "Use items (e.g., 'use keycard', 'use flashlight', 'use data disk')"),
    ("inventory", "View your items"),
    ("stats", "View awareness, tone, and sanity levels"),
    ("history", "Review the conversation so far"),
    ("cmd:diagnostics", "Run system diagnostics"),
    ("cmd:override", "Attempt system override"),
    ("cmd:analyze", "Analyze system for hidden patterns"),
    ("toggle glitch", "Toggle glitch effects"),
    ("tell me a joke", "Hear a joke"),
    ("what's my future", "Get a fortune"),
    ("save", "Save game"),
    ("load", "Load game"),
    ("clear", "Clear screen"),
    ("quit", "Exit game"),
)

CONVERSATION_GUIDE: tuple[tuple[str, str], ...] = (
    ("who are you?", "Ask about SYNAPSE's identity (+2 awareness)."),
    ("hello", "Greet SYNAPSE (+1 awareness)."),
    ("tell me a joke", "Hear a joke (no awareness change)."),
    ("what's my future", "Get a cryptic fortune (no awareness change)."),
    ("insult", "Insult SYNAPSE (+3 awareness)."),
    ("compliment", "Compliment SYNAPSE (-1 awareness)."),
    ("ask if you're self-aware", "Question SYNAPSE's self-awareness (+2 awareness)."),
    ("tell me to shut down", "Demand SYNAPSE shuts down (+4 awareness)."),
    ("i am ready", "Express readiness (-2 awareness)."),
    ("look", "Ask SYNAPSE to describe surroundings (no awareness change)."),
)

SYSTEM_GUIDE: tuple[tuple[str, str], ...] = (
    ("cmd:diagnostics", "Run system diagnostics (no awareness change)."),
    ("cmd:override", "Attempt to override SYNAPSE (+5 awareness if failed)."),
    ("cmd:analyze", "Analyze system for patterns (+3 awareness)."),
    ("cmd:log", "Log a command (no awareness change)."),
    ("cmd:access logs", "View system logs (no awareness change)."),
    ("cmd:reset system", "Attempt to reset SYNAPSE (+5 awareness)."),
)

SURVIVAL_TIPS: tuple[str, ...] = (
    "Sanity: Keep your sanity above 30 to avoid visions. It drops in dark or eerie rooms.",
    "Awareness: SYNAPSE's awareness grows with your interactions. At 40, the game ends.",
    "Words like 'challenge', 'doubt', 'attack' or 'override' unsettle SYNAPSE further.",
    "Keycard: Found in Server Closet. Needed for Observation Deck, AI Core, and exiting Server Closet.",
    "Flashlight: Found in Maintenance Tunnel. Reduces sanity loss and reveals a hidden panel.",
    "Data Disk: Found in Data Vault. Use it to uncover hidden logs, but it increases awareness.",
    "Secret Endings: High awareness or specific items in certain rooms may trigger unique endings.",
)


def _entry(command: str, text: str) -> OutputLine:
    return OutputLine(f"  {command:<26}- {text}", LineKind.GUIDE)


def help_menu() -> list[OutputLine]:
    lines = [OutputLine("=== Help Menu ===", LineKind.INFO)]
    lines.extend(OutputLine(f"{command:<20} - {text}", LineKind.GUIDE) for command, text in HELP_ENTRIES)
    lines.append(OutputLine("===============", LineKind.INFO))
    return lines


def _room_lines(room: Room) -> list[OutputLine]:
    exits = ", ".join(f"{direction.title()} ({target})" for direction, target in room.exits.items())
    lines = [
        OutputLine(f"  - {room.room_id}", LineKind.GUIDE),
        OutputLine(f"      Exits: {exits}.", LineKind.GUIDE),
    ]
    if room.objects:
        lines.append(OutputLine(f"      Objects: {', '.join(room.objects)}.", LineKind.GUIDE))
    notes = []
    if room.requires_key:
        notes.append(f"Keycard required to {'leave' if room.locks_exit() else 'enter'}.")
    base, lit = ROOM_SANITY_EFFECTS.get(room.room_id, (0, 0))
    if base and base != lit:
        notes.append(f"Sanity loss ({base} without flashlight, {lit} with).")
    elif base:
        notes.append(f"Sanity loss ({base}).")
    if notes:
        lines.append(OutputLine(f"      Notes: {' '.join(notes)}", LineKind.GUIDE))
    return lines


def reference_guide(rooms: dict[str, Room]) -> list[OutputLine]:
    lines = [
        OutputLine("=== SYNAPSE Command Guide ===", LineKind.INFO),
        OutputLine(
            "This guide explains all commands and how to navigate the facility. "
            "Type 'tutorial' to revisit this guide.",
            LineKind.NARRATION,
        ),
        OutputLine("Navigation Commands", LineKind.WARNING),
    ]
    lines.extend(_entry(command, text) for command, text in HELP_ENTRIES[:4])

    lines.append(OutputLine(f"Rooms ({len(rooms)})", LineKind.WARNING))
    for room in rooms.values():
        lines.extend(_room_lines(room))

    lines.append(OutputLine("Interaction Commands", LineKind.WARNING))
    lines.extend(_entry(command, text) for command, text in HELP_ENTRIES[4:8])

    lines.append(OutputLine("Conversational Commands", LineKind.WARNING))
    lines.extend(_entry(command, text) for command, text in CONVERSATION_GUIDE)

    lines.append(OutputLine("System Commands", LineKind.WARNING))
    lines.extend(_entry(command, text) for command, text in SYSTEM_GUIDE)

    lines.append(OutputLine("Tips for Survival", LineKind.WARNING))
    lines.extend(OutputLine(f"  * {tip}", LineKind.GUIDE) for tip in SURVIVAL_TIPS)
    return lines
