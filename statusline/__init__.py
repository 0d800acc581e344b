"""Status line monitor built from small system-information components."""

__version__ = "1.0.0"