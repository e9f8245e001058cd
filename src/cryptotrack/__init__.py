"""CryptoTrack: cryptocurrency portfolio tracking backend."""

__version__ = "1.0.0"
