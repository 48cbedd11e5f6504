import pytest

from enigma_trace.config import MachineConfiguration
from enigma_trace.errors import ConfigurationError
from enigma_trace.machine import EnigmaMachine
from enigma_trace.signal_path import PathDirection


def make_machine(fast, middle, slow, reflector="B", plugboard=""):
    """Build a machine from (type, position, ring) triples given fast, middle, slow."""
    return EnigmaMachine.from_dict({
        "rotors": [
            {"type": name, "position": position, "ring": ring}
            for name, position, ring in (fast, middle, slow)
        ],
        "reflector": reflector,
        "plugboard_pairs": plugboard,
    })


def historical_machine():
    """Rotors I-II-III read left to right at AAA: rotor III is the fast rotor."""
    return make_machine(("III", "A", "A"), ("II", "A", "A"), ("I", "A", "A"))


def hello_machine():
    """Slow I (G, ring B), middle II (O, ring M), fast III (X, ring V) with ten plugs."""
    return make_machine(
        ("III", "X", "V"),
        ("II", "O", "M"),
        ("I", "G", "B"),
        plugboard="AV BS CG DL FU HZ IN KM OW RX",
    )


def stepping_machine():
    """Fast rotor I at its notch Q, middle rotor II at its notch E."""
    return make_machine(("I", "Q", "A"), ("II", "E", "A"), ("III", "A", "A"))


class TestReferenceVectors:
    """Test suite for known input/output pairs"""

    def test_aaaaa(self):
        """Test AAAAA enciphers to BDZGO"""
        assert historical_machine().process_string("AAAAA") == "BDZGO"

    def test_bdzgo_decrypts(self):
        """Test BDZGO on a fresh machine gives back AAAAA"""
        assert historical_machine().process_string("BDZGO") == "AAAAA"

    def test_reflector_c(self):
        """Test AAAAA with reflector C"""
        machine = make_machine(("III", "A", "A"), ("II", "A", "A"), ("I", "A", "A"), reflector="C")
        assert machine.process_string("AAAAA") == "PJBUZ"

    def test_rings_positions_and_plugboard(self):
        """Test a message with ring settings, start positions and ten plugboard pairs"""
        assert hello_machine().process_string("HELLOWORLD") == "CYXRAGLLMM"

    def test_rings_positions_and_plugboard_decrypt(self):
        """Test that the same configuration deciphers the message"""
        assert hello_machine().process_string("CYXRAGLLMM") == "HELLOWORLD"

    def test_default_configuration(self):
        """Test that the default setup is I II III read left to right"""
        machine = EnigmaMachine(MachineConfiguration.default())
        assert machine.process_string("AAAAA") == "BDZGO"

    def test_default_configuration_single_letter(self):
        """Test A from rest on the default setup"""
        outcome = EnigmaMachine(MachineConfiguration.default()).process_character("A")
        assert outcome.output_letter == "B"
        assert outcome.positions_before == ("A", "A", "A")
        assert outcome.positions_after == ("A", "A", "B")

    def test_rotor_i_in_fast_slot(self):
        """Test AAAAA with rotor I as the fast rotor"""
        machine = make_machine(("I", "A", "A"), ("II", "A", "A"), ("III", "A", "A"))
        assert machine.process_string("AAAAA") == "FTZMG"


class TestStepping:
    """Test suite for rotor stepping"""

    def test_first_key_press_from_rest(self):
        """Test that only the fast rotor moves from AAA"""
        machine = historical_machine()
        assert machine.positions == ("A", "A", "A")
        machine.step_rotors()
        assert machine.positions == ("A", "A", "B")

    def test_fast_and_middle_at_notch(self):
        """Test that the slow rotor steps when both notches line up"""
        machine = stepping_machine()
        assert machine.positions == ("A", "E", "Q")
        machine.step_rotors()
        assert machine.positions == ("B", "F", "R")
        machine.step_rotors()
        assert machine.positions == ("B", "F", "S")

    def test_fast_turnover_steps_middle(self):
        """Test that leaving the fast notch carries the middle rotor"""
        machine = make_machine(("III", "U", "A"), ("II", "D", "A"), ("I", "A", "A"))
        machine.step_rotors()
        assert machine.positions == ("A", "D", "V")
        machine.step_rotors()
        assert machine.positions == ("A", "E", "W")

    def test_middle_notch_alone_does_not_double_step(self):
        """Test that the middle rotor resting on its notch does not step by itself"""
        machine = make_machine(("III", "W", "A"), ("II", "E", "A"), ("I", "A", "A"))
        machine.step_rotors()
        assert machine.positions == ("A", "E", "X")

    def test_fast_rotor_moves_every_letter(self):
        """Test that the fast rotor advances once per processed letter"""
        machine = historical_machine()
        for outcome in machine.process_string_detailed("THEQUICKBROWNFOXJUMPSOVERTHELAZYDOG"):
            assert outcome.positions_before[2] != outcome.positions_after[2]

    def test_full_fast_revolution(self):
        """Test that 26 letters move the middle rotor exactly once"""
        machine = historical_machine()
        machine.process_string("A" * 26)
        assert machine.positions == ("A", "B", "A")

    def test_slow_rotor_moves_only_on_double_notch(self):
        """Test the slow rotor over a long run"""
        machine = historical_machine()
        outcomes = machine.process_string_detailed("A" * 2000)
        for outcome in outcomes:
            before, after = outcome.positions_before, outcome.positions_after
            if before[0] != after[0]:
                assert before[1] == "E" and before[2] == "V"


class TestDetailedOutcome:
    """Test suite for the per-letter signal path"""

    def test_single_letter(self):
        """Test the outcome of A from rest"""
        [outcome] = historical_machine().process_string_detailed("A")
        assert outcome.input_letter == "A"
        assert outcome.output_letter == "B"
        assert outcome.positions_before == ("A", "A", "A")
        assert outcome.positions_after == ("A", "A", "B")

    def test_path_stages(self):
        """Test all nine stages of A from rest"""
        [outcome] = historical_machine().process_string_detailed("A")
        stages = [(e.component, e.input_letter, e.output_letter, e.direction) for e in outcome.path]
        assert stages == [
            ("Plugboard", "A", "A", PathDirection.FORWARD),
            ("Rotor III", "A", "C", PathDirection.FORWARD),
            ("Rotor II", "C", "D", PathDirection.FORWARD),
            ("Rotor I", "D", "F", PathDirection.FORWARD),
            ("Reflector B", "F", "S", PathDirection.REFLECT),
            ("Rotor I", "S", "S", PathDirection.BACKWARD),
            ("Rotor II", "S", "E", PathDirection.BACKWARD),
            ("Rotor III", "E", "B", PathDirection.BACKWARD),
            ("Plugboard", "B", "B", PathDirection.BACKWARD),
        ]

    def test_path_with_plugboard(self):
        """Test that the plugboard shows up on entry and exit"""
        [outcome] = hello_machine().process_string_detailed("H")
        assert outcome.path[0].input_letter == "H"
        assert outcome.path[0].output_letter == "Z"
        assert outcome.path[-1].input_letter == "G"
        assert outcome.path[-1].output_letter == "C"
        assert outcome.positions_after == ("G", "O", "Y")

    def test_path_is_chained(self):
        """Test that each stage starts where the previous one ended"""
        for outcome in hello_machine().process_string_detailed("HELLOWORLD"):
            assert len(outcome.path) == 9
            assert outcome.path[0].input_letter == outcome.input_letter
            assert outcome.path[-1].output_letter == outcome.output_letter
            for prev, entry in zip(outcome.path, outcome.path[1:]):
                assert entry.input_letter == prev.output_letter

    def test_direction_counts(self):
        """Test 4 forward, 1 reflect, 4 backward stages"""
        [outcome] = hello_machine().process_string_detailed("Q")
        assert len(outcome.stages(PathDirection.FORWARD)) == 4
        assert len(outcome.stages(PathDirection.REFLECT)) == 1
        assert len(outcome.stages(PathDirection.BACKWARD)) == 4

    def test_never_maps_to_itself(self):
        """Test that no letter enciphers to itself"""
        for outcome in hello_machine().process_string_detailed("ABCDEFGHIJKLMNOPQRSTUVWXYZ" * 4):
            assert outcome.output_letter != outcome.input_letter

    def test_outcome_is_immutable(self):
        """Test that outcomes cannot be modified"""
        [outcome] = historical_machine().process_string_detailed("A")
        with pytest.raises(AttributeError):
            outcome.output_letter = "Z"

    def test_simple_and_detailed_agree(self):
        """Test that both modes produce the same letters"""
        text = "Attack at dawn!"
        simple = hello_machine().process_string(text)
        detailed = hello_machine().process_string_detailed(text)
        assert simple == "".join(o.output_letter for o in detailed)


class TestMessageProcessing:
    """Test suite for whole-string processing"""

    def test_non_letters_are_dropped(self):
        """Test that non-letters produce no output and do not move the rotors"""
        noisy = historical_machine()
        clean = historical_machine()
        assert noisy.process_string("A a, 1 A? a-A!") == clean.process_string("AAAAA")
        assert noisy.positions == clean.positions

    def test_only_non_letters(self):
        """Test that a message without letters leaves the machine untouched"""
        machine = historical_machine()
        assert machine.process_string("123 !?") == ""
        assert machine.process_string_detailed("...") == []
        assert machine.positions == ("A", "A", "A")

    def test_lower_case_is_upper_cased(self):
        """Test case-insensitive input"""
        assert historical_machine().process_string("aaaaa") == "BDZGO"

    def test_calls_continue_rotor_state(self):
        """Test that a second call continues where the first stopped"""
        machine = historical_machine()
        assert machine.process_string("AA") + machine.process_string("AAA") == "BDZGO"
        assert machine.positions == ("A", "A", "F")

    def test_fresh_machine_restarts(self):
        """Test that fresh() goes back to the configured positions"""
        machine = historical_machine()
        machine.process_string("AAAAA")
        assert machine.fresh().process_string("AAAAA") == "BDZGO"
        assert machine.fresh().positions == ("A", "A", "A")

    def test_reciprocity(self):
        """Test that deciphering with the same configuration restores the message"""
        message = "DERFUEHRERISTTOTDERKAMPFGEHTWEITERDOENITZ"
        ciphertext = hello_machine().process_string(message)
        assert ciphertext != message
        assert hello_machine().process_string(ciphertext) == message

    def test_determinism(self):
        """Test that identical machines produce identical results"""
        first, second = hello_machine(), hello_machine()
        assert first.process_string_detailed("HELLO WORLD") == second.process_string_detailed("HELLO WORLD")

    def test_process_character_rejects_non_letters(self):
        """Test that an invalid character is rejected before the rotors move"""
        machine = historical_machine()
        with pytest.raises(ValueError):
            machine.process_character("1")
        assert machine.positions == ("A", "A", "A")

    def test_process_character_accepts_lower_case(self):
        """Test one lower-case letter"""
        outcome = historical_machine().process_character("a")
        assert outcome.input_letter == "A"
        assert outcome.output_letter == "B"


class TestConstruction:
    """Test suite for building machines"""

    def test_unknown_rotor(self):
        """Test that an unknown rotor name is a typed construction error"""
        with pytest.raises(ConfigurationError, match="Unknown rotor"):
            make_machine(("IV", "A", "A"), ("II", "A", "A"), ("I", "A", "A"))

    def test_unknown_reflector(self):
        """Test that an unknown reflector name is a typed construction error"""
        with pytest.raises(ConfigurationError, match="Unknown reflector"):
            make_machine(("III", "A", "A"), ("II", "A", "A"), ("I", "A", "A"), reflector="D")

    def test_machines_do_not_share_state(self):
        """Test that two machines from one configuration are independent"""
        config = MachineConfiguration.default()
        first, second = EnigmaMachine(config), EnigmaMachine(config)
        first.process_string("ABC")
        assert second.positions == ("A", "A", "A")
        assert first.positions == ("A", "A", "D")

    def test_repr(self):
        """Test the debug representation"""
        assert repr(historical_machine()) == "<EnigmaMachine I II III pos=AAA reflector=B>"
