"""Portprobe package.

This package scans a contiguous port range on a single host with a bounded
pool of worker threads, classifies each port as open, closed or timed out,
and returns a sorted, timed report. A small key/value config store with a
CLI and an HTTP lookup endpoint ships alongside the scanner.
"""

__all__ = [
    "__version__",
    "models",
]

__version__ = "0.1.0"
