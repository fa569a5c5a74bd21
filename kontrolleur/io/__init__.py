"""
IO module for bounded byte reading.
"""

from .byte_cursor import ByteCursor

__all__ = ['ByteCursor']
