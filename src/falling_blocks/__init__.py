"""Falling Blocks: a small falling-block puzzle game with pygame and gymnasium front ends."""

__version__ = "0.1.0"
