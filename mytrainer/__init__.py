"""MyTrainer — timed workout player with spoken cues."""

__version__ = "0.1.0"
