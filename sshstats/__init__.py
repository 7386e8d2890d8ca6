"""
Apache status collector for Cacti.

- core/: Configuration, logging, exceptions, shared utilities
- collector/: Option parsing, result cache, remote fetch, status parsing, output
"""

__version__ = "1.0.0"
