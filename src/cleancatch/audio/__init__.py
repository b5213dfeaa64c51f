"""
Clean Catch audio - synthesised chiptune cues.
"""

from .engine import AudioEngine

__all__ = ["AudioEngine"]
