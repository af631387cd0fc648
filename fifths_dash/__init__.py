"""Terminal dashboard with a circle-of-fifths diagram and a navigable menu."""

__version__ = "0.1.0"
