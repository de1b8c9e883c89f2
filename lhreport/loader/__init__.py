"""Loader for audit run results."""

from lhreport.loader.loader import ResultLoader

__all__ = ["ResultLoader"]
