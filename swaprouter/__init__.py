"""Swap Router - multi-hop DEX route discovery and execution planning."""

__version__ = "0.1.0"
__all__ = ["__version__"]
