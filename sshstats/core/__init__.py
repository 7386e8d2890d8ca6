"""
Core infrastructure.

Configuration loading, structured logging and the exception hierarchy
shared by the collector and the CLI entry point.
"""
