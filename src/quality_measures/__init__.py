"""Quality Measures - bottom-up aggregation of code quality measures."""

__version__ = "0.3.0"
__author__ = "Quality Measures Contributors"

from .core.exceptions import QualityMeasuresError

__all__ = ["QualityMeasuresError", "__version__"]
