"""LMIQ: maze-solving benchmark for language models."""

__version__ = "0.1.0"
