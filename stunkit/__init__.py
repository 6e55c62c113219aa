"""Networking building blocks for STUN clients and servers: sockets, polling,
adapters, name resolution and console helpers."""

__version__ = "0.1.0"