"""
Probe Utilities Package
"""

from probe.utils.ping_parser import parse, parse_stats

__all__ = [
    "parse",
    "parse_stats",
]
