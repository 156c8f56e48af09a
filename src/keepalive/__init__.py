"""Keepalive host - cooperative CPU task host driven by keep-alive pings."""

__version__ = "0.1.0"
