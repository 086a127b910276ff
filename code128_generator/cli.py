"""CLI entry point for Code128 Generator."""

import argparse
import logging
import sys

from code128_generator import DEFAULT_BAR_WEIGHT, __version__


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="code128-generator",
        description="Encode ASCII text as a Code128 barcode (code sets A and B).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show the symbol codes and image size for a message
  code128-generator --text "HELLO world"

  # Double-width modules, no quiet zone, with a text preview of the bars
  code128-generator --text "ABC-123" --bar-weight 2 --no-quiet-zone --preview
        """,
    )

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    # Required
    parser.add_argument(
        "--text",
        required=True,
        help="ASCII message to encode (characters 0-127)",
    )

    # Optional rendering parameters
    parser.add_argument(
        "--bar-weight",
        type=int,
        default=DEFAULT_BAR_WEIGHT,
        help=f"Pixel width of one module. Default: {DEFAULT_BAR_WEIGHT}",
    )

    # Flags
    parser.add_argument(
        "--no-quiet-zone",
        action="store_true",
        help="Omit the blank margin on both sides of the bars",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Print one pixel row of the rendered bars as text",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    return parser


def _preview_row(bitmap) -> str:
    from code128_generator.rendering import MARK

    return "".join("#" if p == MARK else " " for p in bitmap.row(0))


def main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Lazy imports for faster --help
    from code128_generator.content import Code128Content
    from code128_generator.rendering import make_barcode_image

    try:
        content = Code128Content(args.text)
        bitmap = make_barcode_image(
            content.codes,
            bar_weight=args.bar_weight,
            add_quiet_zone=not args.no_quiet_zone,
        )
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(f"Code128 Generator v{__version__}")
    print("=" * 50)
    print(f"  Text:        {content.text!r}")
    print(f"  Start set:   {content.start_codeset.value}")
    print(f"  Codes:       {' '.join(str(c) for c in content.codes)}")
    print(f"  Checksum:    {content.checksum}")
    print(f"  Image size:  {bitmap.width}x{bitmap.height}")

    if args.preview:
        print()
        print(_preview_row(bitmap))

    return 0


if __name__ == "__main__":
    sys.exit(main())
