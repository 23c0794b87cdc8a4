"""Atelier core: edition inventory, catalogue membership and derived images."""

__version__ = "0.1.0"
