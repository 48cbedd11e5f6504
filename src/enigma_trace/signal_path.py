from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

type Positions = Tuple[str, str, str]


class PathDirection(str, Enum):
    FORWARD = "forward"
    REFLECT = "reflect"
    BACKWARD = "backward"

    def __str__(self):
        return self.value


@dataclass(frozen=True, slots=True)
class SignalPathEntry:
    """One stage of the signal path: which component, what went in, what came out."""

    component: str
    input_letter: str
    output_letter: str
    direction: PathDirection


@dataclass(frozen=True, slots=True)
class CharacterOutcome:
    """Immutable record of enciphering a single letter.

    Positions are (left, middle, right) letters, i.e. (slow, middle, fast).
    """

    input_letter: str
    output_letter: str
    positions_before: Positions
    positions_after: Positions
    path: Tuple[SignalPathEntry, ...] = field(default_factory=tuple)

    def stages(self, direction: PathDirection) -> Tuple[SignalPathEntry, ...]:
        return tuple(entry for entry in self.path if entry.direction == direction)
