"""CRICAI Proxy - resilient caching proxy for cricket data APIs."""

__version__ = "2.0.0"
