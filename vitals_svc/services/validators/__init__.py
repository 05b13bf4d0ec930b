"""
Validation utilities for services.
"""
from services.validators.numbers import as_whole_number, as_finite_number

__all__ = [
    "as_whole_number",
    "as_finite_number",
]
