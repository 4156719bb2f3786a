"""Pulsar content submission validator."""

__version__ = "0.1.0"
