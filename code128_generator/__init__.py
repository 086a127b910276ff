"""Code128 Generator — encode ASCII text as Code128 (sets A/B) and rasterize it."""

__version__ = "1.0.0"

# Shared constants
QUIET_ZONE_MODULES = 10  # Blank margin on each side, in modules
HEIGHT_RATIO = 0.30  # Bar height relative to the symbol width
CHECKSUM_MODULUS = 103
DEFAULT_BAR_WEIGHT = 1  # Pixels per module; 1 or 2 work well
