"""Interactive explorer for general second-degree curves."""

__version__ = "0.1.0"
