"""Render Code128 symbol codes into a monochrome bitmap."""

import logging
from dataclasses import dataclass, field
from itertools import zip_longest

from PIL import Image

from code128_generator import DEFAULT_BAR_WEIGHT, HEIGHT_RATIO, QUIET_ZONE_MODULES
from code128_generator.content import encode_message

logger = logging.getLogger(__name__)

# 32-bit ARGB pixel values
BACKGROUND = 0xFFFFFFFF
MARK = 0xFF000000

_RGBA = {
    BACKGROUND: (255, 255, 255, 255),
    MARK: (0, 0, 0, 255),
}

# Module widths per symbol code, alternating bar and space.
# Every code is 11 modules wide; STOP has a trailing bar and is 13.
PATTERNS: tuple[tuple[int, ...], ...] = (
    (2, 1, 2, 2, 2, 2),  # 0
    (2, 2, 2, 1, 2, 2),  # 1
    (2, 2, 2, 2, 2, 1),  # 2
    (1, 2, 1, 2, 2, 3),  # 3
    (1, 2, 1, 3, 2, 2),  # 4
    (1, 3, 1, 2, 2, 2),  # 5
    (1, 2, 2, 2, 1, 3),  # 6
    (1, 2, 2, 3, 1, 2),  # 7
    (1, 3, 2, 2, 1, 2),  # 8
    (2, 2, 1, 2, 1, 3),  # 9
    (2, 2, 1, 3, 1, 2),  # 10
    (2, 3, 1, 2, 1, 2),  # 11
    (1, 1, 2, 2, 3, 2),  # 12
    (1, 2, 2, 1, 3, 2),  # 13
    (1, 2, 2, 2, 3, 1),  # 14
    (1, 1, 3, 2, 2, 2),  # 15
    (1, 2, 3, 1, 2, 2),  # 16
    (1, 2, 3, 2, 2, 1),  # 17
    (2, 2, 3, 2, 1, 1),  # 18
    (2, 2, 1, 1, 3, 2),  # 19
    (2, 2, 1, 2, 3, 1),  # 20
    (2, 1, 3, 2, 1, 2),  # 21
    (2, 2, 3, 1, 1, 2),  # 22
    (3, 1, 2, 1, 3, 1),  # 23
    (3, 1, 1, 2, 2, 2),  # 24
    (3, 2, 1, 1, 2, 2),  # 25
    (3, 2, 1, 2, 2, 1),  # 26
    (3, 1, 2, 2, 1, 2),  # 27
    (3, 2, 2, 1, 1, 2),  # 28
    (3, 2, 2, 2, 1, 1),  # 29
    (2, 1, 2, 1, 2, 3),  # 30
    (2, 1, 2, 3, 2, 1),  # 31
    (2, 3, 2, 1, 2, 1),  # 32
    (1, 1, 1, 3, 2, 3),  # 33
    (1, 3, 1, 1, 2, 3),  # 34
    (1, 3, 1, 3, 2, 1),  # 35
    (1, 1, 2, 3, 1, 3),  # 36
    (1, 3, 2, 1, 1, 3),  # 37
    (1, 3, 2, 3, 1, 1),  # 38
    (2, 1, 1, 3, 1, 3),  # 39
    (2, 3, 1, 1, 1, 3),  # 40
    (2, 3, 1, 3, 1, 1),  # 41
    (1, 1, 2, 1, 3, 3),  # 42
    (1, 1, 2, 3, 3, 1),  # 43
    (1, 3, 2, 1, 3, 1),  # 44
    (1, 1, 3, 1, 2, 3),  # 45
    (1, 1, 3, 3, 2, 1),  # 46
    (1, 3, 3, 1, 2, 1),  # 47
    (3, 1, 3, 1, 2, 1),  # 48
    (2, 1, 1, 3, 3, 1),  # 49
    (2, 3, 1, 1, 3, 1),  # 50
    (2, 1, 3, 1, 1, 3),  # 51
    (2, 1, 3, 3, 1, 1),  # 52
    (2, 1, 3, 1, 3, 1),  # 53
    (3, 1, 1, 1, 2, 3),  # 54
    (3, 1, 1, 3, 2, 1),  # 55
    (3, 3, 1, 1, 2, 1),  # 56
    (3, 1, 2, 1, 1, 3),  # 57
    (3, 1, 2, 3, 1, 1),  # 58
    (3, 3, 2, 1, 1, 1),  # 59
    (3, 1, 4, 1, 1, 1),  # 60
    (2, 2, 1, 4, 1, 1),  # 61
    (4, 3, 1, 1, 1, 1),  # 62
    (1, 1, 1, 2, 2, 4),  # 63
    (1, 1, 1, 4, 2, 2),  # 64
    (1, 2, 1, 1, 2, 4),  # 65
    (1, 2, 1, 4, 2, 1),  # 66
    (1, 4, 1, 1, 2, 2),  # 67
    (1, 4, 1, 2, 2, 1),  # 68
    (1, 1, 2, 2, 1, 4),  # 69
    (1, 1, 2, 4, 1, 2),  # 70
    (1, 2, 2, 1, 1, 4),  # 71
    (1, 2, 2, 4, 1, 1),  # 72
    (1, 4, 2, 1, 1, 2),  # 73
    (1, 4, 2, 2, 1, 1),  # 74
    (2, 4, 1, 2, 1, 1),  # 75
    (2, 2, 1, 1, 1, 4),  # 76
    (4, 1, 3, 1, 1, 1),  # 77
    (2, 4, 1, 1, 1, 2),  # 78
    (1, 3, 4, 1, 1, 1),  # 79
    (1, 1, 1, 2, 4, 2),  # 80
    (1, 2, 1, 1, 4, 2),  # 81
    (1, 2, 1, 2, 4, 1),  # 82
    (1, 1, 4, 2, 1, 2),  # 83
    (1, 2, 4, 1, 1, 2),  # 84
    (1, 2, 4, 2, 1, 1),  # 85
    (4, 1, 1, 2, 1, 2),  # 86
    (4, 2, 1, 1, 1, 2),  # 87
    (4, 2, 1, 2, 1, 1),  # 88
    (2, 1, 2, 1, 4, 1),  # 89
    (2, 1, 4, 1, 2, 1),  # 90
    (4, 1, 2, 1, 2, 1),  # 91
    (1, 1, 1, 1, 4, 3),  # 92
    (1, 1, 1, 3, 4, 1),  # 93
    (1, 3, 1, 1, 4, 1),  # 94
    (1, 1, 4, 1, 1, 3),  # 95
    (1, 1, 4, 3, 1, 1),  # 96
    (4, 1, 1, 1, 1, 3),  # 97
    (4, 1, 1, 3, 1, 1),  # 98  SHIFT
    (1, 1, 3, 1, 4, 1),  # 99
    (1, 1, 4, 1, 3, 1),  # 100 CODE B
    (3, 1, 1, 1, 4, 1),  # 101 CODE A
    (4, 1, 1, 1, 3, 1),  # 102
    (2, 1, 1, 4, 1, 2),  # 103 START A
    (2, 1, 1, 2, 1, 4),  # 104 START B
    (2, 1, 1, 2, 3, 2),  # 105 reserved
    (2, 3, 3, 1, 1, 1, 2),  # 106 STOP
)


@dataclass
class Bitmap:
    """Row-major ARGB pixel buffer holding only BACKGROUND and MARK."""

    width: int
    height: int
    pixels: list[int] = field(default_factory=list)

    def __post_init__(self):
        if not self.pixels:
            self.pixels = [BACKGROUND] * (self.width * self.height)
        elif len(self.pixels) != self.width * self.height:
            raise ValueError(
                f"Pixel buffer has {len(self.pixels)} entries, "
                f"expected {self.width}x{self.height}."
            )

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def index(self, x: int, y: int) -> int:
        """Offset of pixel (x, y) in the flat buffer."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} bitmap")
        return y * self.width + x

    def get_pixel(self, x: int, y: int) -> int:
        return self.pixels[self.index(x, y)]

    def is_mark(self, x: int, y: int) -> bool:
        return self.get_pixel(x, y) == MARK

    def row(self, y: int) -> list[int]:
        start = self.index(0, y)
        return self.pixels[start:start + self.width]

    def column(self, x: int) -> list[int]:
        return [self.get_pixel(x, y) for y in range(self.height)]

    def fill_columns(self, x: int, span: int, value: int = MARK) -> None:
        """Paint a full-height block of ``span`` columns starting at ``x``."""
        if span <= 0:
            return
        # Both ends must fall inside the bitmap
        self.index(x, 0)
        self.index(x + span - 1, 0)
        run = [value] * span
        for y in range(self.height):
            start = y * self.width + x
            self.pixels[start:start + span] = run

    def to_image(self) -> Image.Image:
        """Convert to an in-memory Pillow image in RGBA mode."""
        img = Image.new("RGBA", self.size)
        img.putdata([_RGBA[p] for p in self.pixels])
        return img


def image_size(code_count: int, bar_weight: int, add_quiet_zone: bool) -> tuple[int, int]:
    """Compute (width, height) in pixels for a sequence of ``code_count`` codes.

    Each code is 11 modules wide; 35 modules cover start, checksum and the
    13-module STOP. The height follows the bar area only, so adding the
    quiet zone widens the image without making it taller.
    """
    width = ((code_count - 3) * 11 + 35) * bar_weight
    height = int(width * HEIGHT_RATIO) + 1

    if add_quiet_zone:
        width += 2 * QUIET_ZONE_MODULES * bar_weight  # on both sides

    return width, height


def _check_bar_weight(bar_weight: int) -> None:
    if isinstance(bar_weight, bool) or not isinstance(bar_weight, int) or bar_weight < 1:
        raise ValueError(f"bar_weight must be a positive integer, got {bar_weight!r}.")


def make_barcode_image(
    codes: list[int] | tuple[int, ...],
    bar_weight: int = DEFAULT_BAR_WEIGHT,
    add_quiet_zone: bool = True,
) -> Bitmap:
    """Paint a Code128 symbol-code sequence as vertical bars.

    Codes are not re-validated; pass a sequence produced by
    ``encode_message``.

    Args:
        codes: Symbol codes, start code through STOP.
        bar_weight: Pixel width of one module (1 or 2 works well).
        add_quiet_zone: Add the blank margin on both sides.

    Returns:
        A new Bitmap owned by the caller.

    Raises:
        ValueError: If bar_weight is not a positive integer.
    """
    _check_bar_weight(bar_weight)

    width, height = image_size(len(codes), bar_weight, add_quiet_zone)
    bitmap = Bitmap(width, height)

    # skip quiet zone
    cursor = QUIET_ZONE_MODULES * bar_weight if add_quiet_zone else 0
    for code in codes:
        widths = PATTERNS[code]
        # bars and spaces come in pairs; STOP ends on a bar with no space
        for bar, space in zip_longest(widths[0::2], widths[1::2], fillvalue=0):
            bitmap.fill_columns(cursor, bar * bar_weight)
            # spaces are already background
            cursor += (bar + space) * bar_weight

    logger.debug("Rendered %d codes into %dx%d bitmap", len(codes), width, height)
    return bitmap


def barcode_image_for_text(
    text: str,
    bar_weight: int = DEFAULT_BAR_WEIGHT,
    add_quiet_zone: bool = True,
) -> Bitmap:
    """Encode ``text`` and render it in one step."""
    _check_bar_weight(bar_weight)
    return make_barcode_image(encode_message(text), bar_weight, add_quiet_zone)
