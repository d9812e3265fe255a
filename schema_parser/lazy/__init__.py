# Path: schema_parser/lazy/__init__.py
"""
Lazy Module

Selective parsing of named top-level sections.
"""

from ..lazy.lazy_parser import LazySectionParser

__all__ = ['LazySectionParser']
