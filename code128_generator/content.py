"""Turn a whole message into the Code128 symbol codes that represent it."""

import logging

from code128_generator import CHECKSUM_MODULUS
from code128_generator.codes import (
    STOP,
    CodeSet,
    CodeSetAllowed,
    codes_for_char,
    codeset_allowed_for_char,
    start_code_for_codeset,
    validate_char,
)

logger = logging.getLogger(__name__)


def best_start_set(first: CodeSetAllowed, second: CodeSetAllowed) -> CodeSet:
    """Pick the starting code set from the first two characters' allowances.

    Ties go to code set B.
    """
    vote = 0
    for allowed in (first, second):
        if allowed is CodeSetAllowed.A:
            vote += 1
        elif allowed is CodeSetAllowed.B:
            vote -= 1
    return CodeSet.A if vote > 0 else CodeSet.B


def checksum(codes: list[int] | tuple[int, ...]) -> int:
    """Weighted modulo-103 check value over the start code and data codes.

    The start code has weight 1; every later code is weighted by its index.
    """
    total = codes[0]
    for i in range(1, len(codes)):
        total += i * codes[i]
    return total % CHECKSUM_MODULUS


def _start_set_for(values: list[int]) -> CodeSet:
    first = codeset_allowed_for_char(values[0]) if len(values) > 0 else CodeSetAllowed.A_OR_B
    second = codeset_allowed_for_char(values[1]) if len(values) > 1 else CodeSetAllowed.A_OR_B
    return best_start_set(first, second)


def encode_message(text: str) -> tuple[int, ...]:
    """Encode text as a Code128 symbol-code sequence.

    Args:
        text: ASCII message. May be empty.

    Returns:
        Tuple of codes: start code, data codes, checksum, STOP.

    Raises:
        InvalidCharacterError: If any character is outside ASCII 0-127.
            Nothing is encoded in that case.
    """
    values = [validate_char(ord(ch), position) for position, ch in enumerate(text)]

    codeset = _start_set_for(values)
    results = [start_code_for_codeset(codeset)]

    for i, this_char in enumerate(values):
        next_char = values[i + 1] if i + 1 < len(values) else None
        codes, codeset = codes_for_char(this_char, next_char, codeset)
        results.extend(codes)

    results.append(checksum(results))
    results.append(STOP)

    logger.debug("Encoded %d chars into %d codes: %s", len(values), len(results), results)
    return tuple(results)


def verify_checksum(codes: list[int] | tuple[int, ...]) -> bool:
    """Check that the stored checksum matches the codes before it."""
    if len(codes) < 3 or codes[-1] != STOP:
        return False
    return checksum(codes[:-2]) == codes[-2]


class Code128Content:
    """The set of code values to be output in barcode form for a string."""

    def __init__(self, text: str):
        self._text = text
        self._codes = encode_message(text)

    @property
    def text(self) -> str:
        return self._text

    @property
    def codes(self) -> tuple[int, ...]:
        return self._codes

    @property
    def start_codeset(self) -> CodeSet:
        return CodeSet.A if self._codes[0] == start_code_for_codeset(CodeSet.A) else CodeSet.B

    @property
    def checksum(self) -> int:
        return self._codes[-2]

    def __len__(self) -> int:
        return len(self._codes)

    def __repr__(self) -> str:
        return f"Code128Content({self._text!r})"
