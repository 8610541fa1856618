"""Game runtime pieces: WAV streaming, audio sources and mixing, input maps, image data and file access."""

__version__ = "0.1.0"