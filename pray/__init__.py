"""
pray - prayer times data acquisition core.

Retrying HTTP access, a file-backed response cache and IP geolocation
for the pray command-line client.
"""

__version__ = "1.0.0"
