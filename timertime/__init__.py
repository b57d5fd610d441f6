"""Timer Time: an hourglass countdown timer."""

__version__ = "1.0.0"
