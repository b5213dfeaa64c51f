"""Clean Catch - catch the clean drops, dodge the rest."""

__version__ = "0.1.0"
