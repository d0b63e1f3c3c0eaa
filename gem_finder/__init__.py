"""Gem Finder: share, rate and discuss hidden places on a map."""

__version__ = "1.0.0"
