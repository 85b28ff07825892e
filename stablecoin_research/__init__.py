"""Stablecoin research assistant: query routing, provider adapters and response composition."""

__version__ = "0.1.0"
