"""Code selection for individual characters in Code128 sets A and B."""

import logging
from enum import Enum

logger = logging.getLogger(__name__)

# Control codes
SHIFT = 98
CODE_B = 100  # Switch to code set B
CODE_A = 101  # Switch to code set A
START_A = 103
START_B = 104
STOP = 106

MAX_ASCII = 127


class CodeSet(Enum):
    """Active symbol table. Code set C is not supported."""
    A = "A"
    B = "B"


class CodeSetAllowed(Enum):
    """Which code sets can represent a character."""
    A = "A"
    B = "B"
    A_OR_B = "A_OR_B"


class Code128Error(Exception):
    """Base error for Code128 encoding."""


class InvalidCharacterError(Code128Error, ValueError):
    """Raised for a character outside the 0-127 ASCII range."""

    def __init__(self, char: int, position: int | None = None):
        self.char = char
        self.position = position
        where = f" at position {position}" if position is not None else ""
        super().__init__(
            f"Character value {char}{where} cannot be encoded "
            f"(Code128 A/B covers ASCII 0-{MAX_ASCII})."
        )


def validate_char(char_ascii: int, position: int | None = None) -> int:
    """Return the character value unchanged, or raise InvalidCharacterError."""
    if not 0 <= char_ascii <= MAX_ASCII:
        raise InvalidCharacterError(char_ascii, position)
    return char_ascii


def codeset_allowed_for_char(char_ascii: int) -> CodeSetAllowed:
    """Tell which code set(s) a character value is allowed in."""
    validate_char(char_ascii)
    if 32 <= char_ascii <= 95:
        return CodeSetAllowed.A_OR_B
    return CodeSetAllowed.A if char_ascii < 32 else CodeSetAllowed.B


def char_compatible_with_codeset(char_ascii: int, codeset: CodeSet) -> bool:
    allowed = codeset_allowed_for_char(char_ascii)
    return allowed is CodeSetAllowed.A_OR_B or allowed.value == codeset.value


def code_value_for_char(char_ascii: int) -> int:
    """Symbol value for a character, assuming a code set that contains it.

    The mapping is the same for sets A and B: printable characters are
    offset by 32 and control characters (set A only) land at 64-95.
    """
    validate_char(char_ascii)
    return char_ascii - 32 if char_ascii >= 32 else char_ascii + 64


def start_code_for_codeset(codeset: CodeSet) -> int:
    return START_A if codeset is CodeSet.A else START_B


def codes_for_char(
    char_ascii: int,
    lookahead_ascii: int | None,
    codeset: CodeSet,
) -> tuple[list[int], CodeSet]:
    """Get the symbol code(s) for one character.

    A character outside the current code set is emitted with a one-off
    SHIFT, unless the next character is also outside it, in which case
    the code set is switched for good.

    Args:
        char_ascii: ASCII value of the character to translate.
        lookahead_ascii: ASCII value of the next character, or None at the
            end of the message.
        codeset: Code set in effect before this character.

    Returns:
        Tuple of (codes, codeset in effect after this character). ``codes``
        holds one value, or a SHIFT/switch code followed by the value.

    Raises:
        InvalidCharacterError: If an examined character is outside 0-127.
    """
    value = code_value_for_char(char_ascii)
    if char_compatible_with_codeset(char_ascii, codeset):
        return [value], codeset

    if lookahead_ascii is not None and not char_compatible_with_codeset(lookahead_ascii, codeset):
        if codeset is CodeSet.A:
            switch, new_codeset = CODE_B, CodeSet.B
        else:
            switch, new_codeset = CODE_A, CodeSet.A
        logger.debug("Switching code set %s -> %s for %r", codeset.value, new_codeset.value, chr(char_ascii))
        return [switch, value], new_codeset

    logger.debug("Shifting out of code set %s for %r", codeset.value, chr(char_ascii))
    return [SHIFT, value], codeset
