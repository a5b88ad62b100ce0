"""Substream CLI commands."""
