import pytest

from code128_generator.codes import STOP, CodeSet, CodeSetAllowed, InvalidCharacterError
from code128_generator.content import (
    Code128Content,
    best_start_set,
    checksum,
    encode_message,
    verify_checksum,
)


class TestBestStartSet:
    @pytest.mark.parametrize(
        "first,second,expected",
        [
            (CodeSetAllowed.A_OR_B, CodeSetAllowed.A_OR_B, CodeSet.B),
            (CodeSetAllowed.A, CodeSetAllowed.A_OR_B, CodeSet.A),
            (CodeSetAllowed.A, CodeSetAllowed.A, CodeSet.A),
            (CodeSetAllowed.A, CodeSetAllowed.B, CodeSet.B),
            (CodeSetAllowed.B, CodeSetAllowed.A_OR_B, CodeSet.B),
            (CodeSetAllowed.A_OR_B, CodeSetAllowed.A, CodeSet.A),
        ],
    )
    def test_vote(self, first: CodeSetAllowed, second: CodeSetAllowed, expected: CodeSet) -> None:
        assert best_start_set(first, second) is expected


class TestEncodeMessage:
    def test_empty_input(self) -> None:
        assert encode_message("") == (104, 1, 106)

    def test_single_uppercase(self) -> None:
        assert encode_message("A") == (104, 33, 34, 106)

    def test_single_lowercase(self) -> None:
        assert encode_message("a") == (104, 65, 66, 106)

    def test_starts_in_a_for_control_chars(self) -> None:
        assert encode_message("\x01\x02") == (103, 65, 66, 94, 106)

    def test_shift_for_single_control_char(self) -> None:
        assert encode_message("a\x01b") == (104, 65, 98, 65, 66, 0, 106)

    def test_switch_to_a(self) -> None:
        assert encode_message("a\x01\x02") == (104, 65, 101, 65, 66, 6, 106)

    def test_switch_to_b(self) -> None:
        assert encode_message("\x01\x02ab") == (103, 65, 66, 100, 65, 66, 57, 106)

    def test_shift_for_last_char(self) -> None:
        assert encode_message("\x01\x02a") == (103, 65, 66, 98, 65, 30, 106)

    def test_sequence_structure(self) -> None:
        codes = encode_message("Hello, World!")
        assert codes[0] in (103, 104)
        assert codes[-1] == STOP
        assert 0 <= codes[-2] <= 102
        assert len(codes) == len("Hello, World!") + 3

    def test_length_bounds(self) -> None:
        text = "a\x01b\x02c\x03"
        codes = encode_message(text)
        assert len(text) + 3 <= len(codes) <= 2 * len(text) + 3

    def test_idempotent(self) -> None:
        assert encode_message("Mixed\tCase\x7f") == encode_message("Mixed\tCase\x7f")

    def test_returns_tuple(self) -> None:
        assert isinstance(encode_message("x"), tuple)

    def test_invalid_character_rejected(self) -> None:
        with pytest.raises(InvalidCharacterError) as exc_info:
            encode_message("café")
        assert exc_info.value.position == 3
        assert exc_info.value.char == 0xE9


class TestChecksum:
    def test_start_code_weight_one(self) -> None:
        assert checksum([104]) == 1
        assert checksum([104, 33]) == 34

    @pytest.mark.parametrize(
        "text", ["", "A", "Hello, World!", "a\x01b", "\x01\x02ab", "\x00\x7f" * 10]
    )
    def test_verify_checksum(self, text: str) -> None:
        codes = encode_message(text)
        assert checksum(codes[:-2]) == codes[-2]
        assert verify_checksum(codes)

    def test_verify_checksum_detects_corruption(self) -> None:
        codes = list(encode_message("CODE128"))
        codes[2] = (codes[2] + 1) % 96
        assert not verify_checksum(codes)

    def test_verify_checksum_rejects_short_sequence(self) -> None:
        assert not verify_checksum([104, 106])


class TestCode128Content:
    def test_properties(self) -> None:
        content = Code128Content("A")
        assert content.text == "A"
        assert content.codes == (104, 33, 34, 106)
        assert content.start_codeset is CodeSet.B
        assert content.checksum == 34
        assert len(content) == 4

    def test_start_codeset_a(self) -> None:
        assert Code128Content("\x01\x02").start_codeset is CodeSet.A

    def test_repr(self) -> None:
        assert repr(Code128Content("AB")) == "Code128Content('AB')"
