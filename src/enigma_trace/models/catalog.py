from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from enigma_trace.alphabet import ALPHABET_SIZE, letter_to_index
from enigma_trace.errors import UnknownReflectorError, UnknownRotorError

type Permutation26 = Tuple[int, ...]


class RotorType(str, Enum):
    I = "I"
    II = "II"
    III = "III"

    def __str__(self):
        return self.value

    @classmethod
    def from_name(cls, name: str | RotorType) -> RotorType:
        """Look up a rotor type by name, ignoring case and surrounding whitespace."""
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().upper())
        except ValueError:
            names = ", ".join(member.value for member in cls)
            raise UnknownRotorError(f"Unknown rotor {name!r}. Expected one of: {names}") from None


class ReflectorType(str, Enum):
    B = "B"
    C = "C"

    def __str__(self):
        return self.value

    @classmethod
    def from_name(cls, name: str | ReflectorType) -> ReflectorType:
        """Look up a reflector type by name, ignoring case and surrounding whitespace."""
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().upper())
        except ValueError:
            names = ", ".join(member.value for member in cls)
            raise UnknownReflectorError(f"Unknown reflector {name!r}. Expected one of: {names}") from None


def wiring_from_letters(letters: str) -> Permutation26:
    return tuple(letter_to_index(ch) for ch in letters)


def is_permutation(table: Permutation26) -> bool:
    return len(table) == ALPHABET_SIZE and sorted(table) == list(range(ALPHABET_SIZE))


def is_reflection(table: Permutation26) -> bool:
    """True when the table is an involution with no fixed points."""
    return is_permutation(table) and all(table[table[i]] == i and table[i] != i for i in range(ALPHABET_SIZE))


@dataclass(frozen=True, slots=True)
class RotorSpec:
    """Static wiring and turnover notch of one rotor type."""

    rotor_type: RotorType
    wiring: Permutation26
    notch: int

    def __post_init__(self):
        if not is_permutation(self.wiring):
            raise ValueError(f"Rotor {self.rotor_type} wiring is not a permutation of the alphabet")
        if not (0 <= self.notch < ALPHABET_SIZE):
            raise ValueError(f"Rotor {self.rotor_type} notch {self.notch} out of range")

    @property
    def inverse_wiring(self) -> Permutation26:
        inverse = [0] * ALPHABET_SIZE
        for i, out in enumerate(self.wiring):
            inverse[out] = i
        return tuple(inverse)


@dataclass(frozen=True, slots=True)
class ReflectorSpec:
    """Static wiring of one reflector type."""

    reflector_type: ReflectorType
    wiring: Permutation26

    def __post_init__(self):
        if not is_reflection(self.wiring):
            raise ValueError(f"Reflector {self.reflector_type} wiring must be an involution with no fixed points")


ROTOR_SPECS: dict[RotorType, RotorSpec] = {
    RotorType.I: RotorSpec(RotorType.I, wiring_from_letters("EKMFLGDQVZNTOWYHXUSPAIBRCJ"), letter_to_index("Q")),
    RotorType.II: RotorSpec(RotorType.II, wiring_from_letters("AJDKSIRUXBLHWTMCQGZNPYFVOE"), letter_to_index("E")),
    RotorType.III: RotorSpec(RotorType.III, wiring_from_letters("BDFHJLCPRTXVZNYEIWGAKMUSQO"), letter_to_index("V")),
}

REFLECTOR_SPECS: dict[ReflectorType, ReflectorSpec] = {
    ReflectorType.B: ReflectorSpec(ReflectorType.B, wiring_from_letters("YRUHQSLDPXNGOKMIEBFZCWVJAT")),
    ReflectorType.C: ReflectorSpec(ReflectorType.C, wiring_from_letters("FVPJIAOYEDRZXWGCTKUQSBNMHL")),
}


def rotor_spec(name: str | RotorType) -> RotorSpec:
    return ROTOR_SPECS[RotorType.from_name(name)]


def reflector_spec(name: str | ReflectorType) -> ReflectorSpec:
    return REFLECTOR_SPECS[ReflectorType.from_name(name)]
