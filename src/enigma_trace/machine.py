from typing import Any, List, Mapping

import structlog

from enigma_trace.alphabet import filter_message, index_to_letter, letter_to_index
from enigma_trace.config import MachineConfiguration
from enigma_trace.models.plugboard import Plugboard
from enigma_trace.models.reflector import Reflector
from enigma_trace.models.rotor import Rotor
from enigma_trace.signal_path import CharacterOutcome, PathDirection, Positions, SignalPathEntry

log = structlog.get_logger()


class EnigmaMachine:
    """ Three-rotor machine with a single reflector and plugboard.

    The rotor positions are live state: every processed letter advances them, and
    successive calls on the same instance continue from where the last one stopped.
    Build a new machine (or call `fresh()`) to start a message from the configured
    positions again. Instances are not safe to share between threads.
    """

    def __init__(self, config: MachineConfiguration):
        self.config = config
        self.fast = Rotor.from_letters(config.fast.type, config.fast.position, config.fast.ring)
        self.middle = Rotor.from_letters(config.middle.type, config.middle.position, config.middle.ring)
        self.slow = Rotor.from_letters(config.slow.type, config.slow.position, config.slow.ring)
        self.reflector = Reflector(config.reflector)
        self.plugboard = Plugboard(config.plugboard_pairs)

        log.debug(
            "machine built",
            rotors=[str(r.rotor_type) for r in (self.slow, self.middle, self.fast)],
            positions="".join(self.positions),
            reflector=str(self.reflector.reflector_type),
            plugboard=" ".join(a + b for a, b in self.plugboard.pairs),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EnigmaMachine":
        return cls(MachineConfiguration.parse(data))

    def fresh(self) -> "EnigmaMachine":
        """A new machine at this machine's configured starting positions."""
        return EnigmaMachine(self.config)

    @property
    def positions(self) -> Positions:
        """Window letters in (left, middle, right) order."""
        return (self.slow.position_letter, self.middle.position_letter, self.fast.position_letter)

    def step_rotors(self) -> None:
        """ Advance the rotors for one key press.

        Both notch checks are taken before anything moves. The slow rotor only
        steps when the fast and middle rotors were at their notches together; the
        middle rotor does not step a second time on its own notch.
        """
        fast_at_notch = self.fast.at_notch()
        middle_at_notch = self.middle.at_notch()

        self.fast.step()
        if fast_at_notch:
            self.middle.step()
            if middle_at_notch:
                self.slow.step()

    def process_character(self, letter: str) -> CharacterOutcome:
        """Step the rotors, then send one letter through the 9-stage signal path."""
        letter = letter.upper()
        signal = letter_to_index(letter)  # validate before any rotor moves

        positions_before = self.positions
        self.step_rotors()
        positions_after = self.positions

        path: List[SignalPathEntry] = []

        def stage(component: str, direction: PathDirection, signal_in: int, output: int) -> int:
            path.append(SignalPathEntry(
                component=component,
                input_letter=index_to_letter(signal_in),
                output_letter=index_to_letter(output),
                direction=direction,
            ))
            return output

        # Forward: plugboard, then right to left through the rotors.
        signal = stage(self.plugboard.label, PathDirection.FORWARD, signal, self.plugboard.process(signal))
        for rotor in (self.fast, self.middle, self.slow):
            signal = stage(rotor.label, PathDirection.FORWARD, signal, rotor.forward(signal))

        signal = stage(self.reflector.label, PathDirection.REFLECT, signal, self.reflector.reflect(signal))

        # Backward: left to right through the rotors, then out through the plugboard.
        for rotor in (self.slow, self.middle, self.fast):
            signal = stage(rotor.label, PathDirection.BACKWARD, signal, rotor.backward(signal))
        signal = stage(self.plugboard.label, PathDirection.BACKWARD, signal, self.plugboard.process(signal))

        outcome = CharacterOutcome(
            input_letter=letter,
            output_letter=index_to_letter(signal),
            positions_before=positions_before,
            positions_after=positions_after,
            path=tuple(path),
        )
        log.debug(
            "character processed",
            input=outcome.input_letter,
            output=outcome.output_letter,
            before="".join(positions_before),
            after="".join(positions_after),
        )
        return outcome

    def process_string(self, text: str) -> str:
        """Encipher (or decipher) text, dropping anything that is not an ASCII letter."""
        return "".join(outcome.output_letter for outcome in self.process_string_detailed(text))

    def process_string_detailed(self, text: str) -> List[CharacterOutcome]:
        """Same as process_string, but keep the full outcome of every letter."""
        return [self.process_character(letter) for letter in filter_message(text)]

    def __repr__(self) -> str:
        rotors = " ".join(str(r.rotor_type) for r in (self.slow, self.middle, self.fast))
        return f"<EnigmaMachine {rotors} pos={''.join(self.positions)} reflector={self.reflector.reflector_type}>"
