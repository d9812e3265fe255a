# Path: schema_parser/validation/__init__.py
"""
Validation Module

Structural checks that run without parsing.
"""

from ..validation.quick_validator import QuickValidator

__all__ = ['QuickValidator']
