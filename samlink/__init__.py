"""
samlink: SAM Bridge Client

A small, synchronous client for the SAM text protocol spoken by the
I2P router's local gateway, used to bootstrap anonymous sessions and
resolve names to destinations.
"""

__version__ = "0.1.0"
