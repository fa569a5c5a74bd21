"""
Utility functions and classes.
"""

from .string_utils import escape_name, to_be_form, plural_s

__all__ = ['escape_name', 'to_be_form', 'plural_s']
