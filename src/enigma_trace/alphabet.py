import string

ALPHABET = string.ascii_uppercase
ALPHABET_SIZE = len(ALPHABET)

_ASCII_LETTERS = frozenset(string.ascii_letters)


def letter_to_index(letter: str) -> int:
    """Map an uppercase ASCII letter to its 0-25 index."""
    if len(letter) != 1 or letter not in ALPHABET:
        raise ValueError(f"Invalid letter {letter!r}; expected one of A-Z")
    return ord(letter) - ord("A")


def index_to_letter(index: int) -> str:
    """Map a 0-25 index back to its uppercase letter."""
    if not (0 <= index < ALPHABET_SIZE):
        raise ValueError(f"Index {index} out of range 0-{ALPHABET_SIZE - 1}")
    return ALPHABET[index]


def filter_message(text: str) -> str:
    """ Keep only ASCII letters, upper-cased. Everything else is dropped, not substituted. """
    return "".join(ch.upper() for ch in text if ch in _ASCII_LETTERS)
