"""Hexagonal tile-map editor: paint terrain and start markers, save maps."""

__version__ = "0.1.0"
