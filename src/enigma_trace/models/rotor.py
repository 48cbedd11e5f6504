from __future__ import annotations

from enigma_trace.alphabet import ALPHABET_SIZE, index_to_letter, letter_to_index
from enigma_trace.models.catalog import RotorType, rotor_spec


class Rotor:
    """ A wired disc with a moving position, a fixed ring setting and one turnover notch.

    `position` and `ring_setting` are 0-25 indices. Only `step()` changes the position.
    """

    def __init__(self, rotor_type: str | RotorType, position: int = 0, ring_setting: int = 0):
        spec = rotor_spec(rotor_type)
        for name, value in (("position", position), ("ring_setting", ring_setting)):
            if not (0 <= value < ALPHABET_SIZE):
                raise ValueError(f"Rotor {name} {value} out of range 0-{ALPHABET_SIZE - 1}")

        self.rotor_type = spec.rotor_type
        self.notch = spec.notch
        self._wiring = spec.wiring
        self._inverse_wiring = spec.inverse_wiring
        self.position = position
        self.__ring_setting = ring_setting

    @classmethod
    def from_letters(cls, rotor_type: str | RotorType, position: str = "A", ring: str = "A") -> Rotor:
        return cls(rotor_type, letter_to_index(position), letter_to_index(ring))

    @property
    def ring_setting(self) -> int:
        return self.__ring_setting

    @property
    def label(self) -> str:
        return f"Rotor {self.rotor_type}"

    @property
    def position_letter(self) -> str:
        return index_to_letter(self.position)

    def at_notch(self) -> bool:
        return self.position == self.notch

    def step(self) -> None:
        self.position = (self.position + 1) % ALPHABET_SIZE

    # ── signal paths ---------------------------------------------
    def forward(self, index: int) -> int:
        """Right-to-left pass through the wiring."""
        return self._through(self._wiring, index)

    def backward(self, index: int) -> int:
        """Left-to-right pass through the inverse wiring."""
        return self._through(self._inverse_wiring, index)

    def _through(self, table: tuple[int, ...], index: int) -> int:
        offset = self.position - self.__ring_setting
        shifted_in = (index + offset) % ALPHABET_SIZE
        return (table[shifted_in] - offset) % ALPHABET_SIZE

    def __repr__(self) -> str:
        return f"<Rotor {self.rotor_type} pos={self.position_letter} ring={index_to_letter(self.ring_setting)}>"
