"""이벤트 유형 상수"""


class EventTypes:
    """이벤트 유형 문자열 상수"""

    # world
    PLAYER_MOVED = "player_moved"
    ITEM_TAKEN = "item_taken"
    ITEM_USED = "item_used"
    OBJECT_EXAMINED = "object_examined"

    # resources
    AWARENESS_CHANGED = "awareness_changed"
    SANITY_CHANGED = "sanity_changed"

    # events / endings
    TIMED_EVENT_FIRED = "timed_event_fired"
    ENDING_REACHED = "ending_reached"

    # terminal
    TERMINAL_COMMAND = "terminal_command"

    # persistence
    GAME_SAVED = "game_saved"
    GAME_LOADED = "game_loaded"

    # engine
    TURN_PROCESSED = "turn_processed"
