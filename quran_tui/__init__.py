"""Terminal Quran reader with translations and recitation."""

__version__ = "0.1.0"
