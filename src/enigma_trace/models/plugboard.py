from __future__ import annotations

import structlog

from enigma_trace.alphabet import ALPHABET_SIZE, filter_message, index_to_letter, letter_to_index

log = structlog.get_logger()


class Plugboard:
    """Reciprocal letter swaps applied on the way into and out of the rotor stack."""

    label = "Plugboard"

    def __init__(self, pairs: str = ""):
        self.__map = list(range(ALPHABET_SIZE))
        self.__pairs: list[tuple[str, str]] = []

        # Separators and anything non-alphabetic are ignored; an unpaired trailing letter is dropped.
        letters = filter_message(pairs)
        for a, b in zip(letters[0::2], letters[1::2]):
            a_idx, b_idx = letter_to_index(a), letter_to_index(b)
            if self.__map[a_idx] != a_idx or self.__map[b_idx] != b_idx:
                log.warning("plugboard letter re-plugged", pair=f"{a}{b}")
            self.__map[a_idx] = b_idx
            self.__map[b_idx] = a_idx
            self.__pairs.append((a, b))

    @property
    def pairs(self) -> list[tuple[str, str]]:
        return list(self.__pairs)

    @property
    def mapping(self) -> tuple[int, ...]:
        return tuple(self.__map)

    def process(self, index: int) -> int:
        return self.__map[index]

    def __repr__(self) -> str:
        swaps = " ".join(f"{index_to_letter(a)}{index_to_letter(b)}" for a, b in enumerate(self.__map) if a < b)
        return f"<Plugboard {swaps}>"
