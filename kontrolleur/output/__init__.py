"""
Output generation module.
"""

from .report import Report, ReportBuilder, KNOWN_ENTRY_POINTS
from .text_report import format_report

__all__ = ['Report', 'ReportBuilder', 'KNOWN_ENTRY_POINTS', 'format_report']
