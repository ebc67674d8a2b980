"""
Utility helpers used by the renderer.

This subpackage exposes convenience functions for structured reporting.
"""

from .errors import ERRORS, report_error, report_ok

__all__ = ["ERRORS", "report_error", "report_ok"]
