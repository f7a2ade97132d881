"""Kinematic bicycle-model car simulator."""

__version__ = "0.1.0"
