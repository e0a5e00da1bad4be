"""Terminal monitor for CPU, memory and network usage on Linux."""

__version__ = "0.1.0"
__all__ = ["__version__"]