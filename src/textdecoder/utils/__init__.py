"""Helpers built around the decoding session."""
