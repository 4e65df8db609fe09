"""Indentation policy applied between two adjacent tags.

    o----------------------------------------o
    | Tag combination      | newline | level |
    |----------------------|---------|-------|
    | <opening><opening>   |    Y    |  ++   |
    | <opening></closing>  |    N    |       |
    | </closing><opening>  |    Y    |       |
    | </closing></closing> |    Y    |  --   |
    | <empty/><opening>    |    Y    |       |
    | <empty/></closing>   |    Y    |  --   |
    o----------------------------------------o
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from .state import TagKind

INDENT_UNIT = b"\t"
NEWLINE = b"\n"


@dataclass(frozen=True)
class TransitionAction:
    """Layout change inserted before the second of two adjacent tags."""

    newline: bool = False
    level_delta: int = 0


NO_ACTION = TransitionAction()

TRANSITIONS: Dict[Tuple[TagKind, TagKind], TransitionAction] = {
    (TagKind.OPENING, TagKind.OPENING): TransitionAction(newline=True, level_delta=1),
    (TagKind.OPENING, TagKind.CLOSING): NO_ACTION,
    (TagKind.CLOSING, TagKind.OPENING): TransitionAction(newline=True),
    (TagKind.CLOSING, TagKind.CLOSING): TransitionAction(newline=True, level_delta=-1),
    (TagKind.EMPTY, TagKind.OPENING): TransitionAction(newline=True),
    (TagKind.EMPTY, TagKind.CLOSING): TransitionAction(newline=True, level_delta=-1),
}


def lookup_transition(previous: TagKind, pending: TagKind) -> TransitionAction:
    """Return the action for a ``previous`` tag directly followed by ``pending``."""
    return TRANSITIONS.get((previous, pending), NO_ACTION)


def indent(level: int) -> bytes:
    """One indent unit per nesting level; nothing at level 0."""
    return INDENT_UNIT * max(level, 0)


def apply_transition(level: int, action: TransitionAction) -> Tuple[int, bytes]:
    """Apply ``action`` at nesting ``level``.

    Returns:
        Tuple of (new_level, bytes to emit before the withheld '<')
    """
    if not action.newline:
        return level, b""
    new_level = max(level + action.level_delta, 0)
    return new_level, NEWLINE + indent(new_level)
