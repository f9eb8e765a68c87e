"""A multithreaded Pong arcade game with three rule sets, drawn with pygame."""

__version__ = "0.1.0"
__all__ = ["__version__"]