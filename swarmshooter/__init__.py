"""Building blocks for a fixed-screen arcade shooter with swarming enemies, on pygame."""

__version__ = "0.1.0"