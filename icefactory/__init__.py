"""Ice-cream factory simulation: locked counters, shared memory and TCP messaging."""

__version__ = "0.1.0"