"""Galaksija tape images (GTP), tape audio, BASIC encoding, character ROMs and screen graphics."""

__version__ = "0.2.2"