"""careride — doctor search, sponsored placement and entitlements."""

__version__ = "0.1.0"
