"""feedmap: resolve feed records onto content fields and detect changes."""

__version__ = "0.1.0"
