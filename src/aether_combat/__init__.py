"""Turn-based combat resolution engine for an AI-narrated role-playing game."""

__version__ = "0.1.0"
