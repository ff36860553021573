"""Reporters for aggregation results."""

from .console import ConsoleReporter, measures_to_dict

__all__ = ["ConsoleReporter", "measures_to_dict"]
