"""Taskboard CLI - a three-column todo board backed by a hosted store."""

__version__ = "0.1.0"
