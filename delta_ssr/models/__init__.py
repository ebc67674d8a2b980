"""
Input models for delta documents.
"""

from .delta import Delta, DeltaInputError, DeltaOp, normalize_delta

__all__ = ["Delta", "DeltaInputError", "DeltaOp", "normalize_delta"]
