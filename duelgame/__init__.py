"""A small 2D sprite-based duel game with input, logging, profiling and file helpers."""

__version__ = "0.1.0"
__all__ = ["__version__"]