"""Document computation engine: totals, classification text and formatting."""

from .number_normalizer import normalize_decimal, to_number

__all__ = ["normalize_decimal", "to_number"]
