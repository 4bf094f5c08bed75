"""Endpoint wrappers for the hosted store."""
