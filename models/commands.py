from __future__ import annotations

from enum import Enum

BACKSPACE = "\b"


class Command(Enum):
    """Discrete input commands consumed by the player session."""
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    JUMP_FIRST = "jump_first"
    JUMP_LAST = "jump_last"
    PLAY_SELECTED = "play_selected"
    PAUSE = "pause"
    RESUME = "resume"
    STOP = "stop"
    NEXT = "next"
    PREV = "prev"
    SEEK_FORWARD = "seek_forward"
    SEEK_BACKWARD = "seek_backward"
    TOGGLE_MODE = "toggle_mode"
    ENTER_SEARCH = "enter_search"
    EDIT_QUERY = "edit_query"
    SET_QUERY = "set_query"
    NEXT_RESULT = "next_result"
    PREV_RESULT = "prev_result"
    COMMIT_SEARCH = "commit_search"
    CANCEL_SEARCH = "cancel_search"
    PLAY_RESULT = "play_result"
