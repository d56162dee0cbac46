"""
app/validators package marker.
"""

from app.validators.spend_csv_validator import SpendCSVNormalizer

__all__ = [
    "SpendCSVNormalizer",
]
