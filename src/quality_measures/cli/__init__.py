"""Command line interface for quality-measures."""
