"""
Human readable rendering of a Report.
"""

from typing import List

from ..utils.string_utils import escape_name, plural_s, to_be_form
from .report import Report, KNOWN_ENTRY_POINTS


def _qualified(module_name: str, field_name: str) -> str:
    return f"{escape_name(module_name)}::{escape_name(field_name)}"


def format_report(report: Report, verbose: bool = False) -> str:
    """
    Render a report as text.

    Args:
        report: Inspection report
        verbose: Also list every import with the category it resolved to

    Returns:
        The report text, newline terminated
    """
    lines: List[str] = []
    total = report.total_imports
    lines.append(f"There {to_be_form(total)} {total} total external API call{plural_s(total)}.")

    if report.is_wasi_binary:
        wasi_count = report.wasi_call_count
        lines.append("This binary is expecting a WASI compliant runtime.")
        lines.append(f"\tWASI namespace: {escape_name(report.wasi_namespace)}")
        if len(report.wasi_namespaces) > 1:
            namespaces = ", ".join(escape_name(ns) for ns in report.wasi_namespaces)
            lines.append(f"\tImports also reference: {namespaces}")
        lines.append(f"\tThe binary uses {wasi_count} WASI call{plural_s(wasi_count)}")
        if report.capabilities:
            lines.append("\tThe following system resource types are used:")
            lines.append("\t\t" + ", ".join(c.label for c in report.capabilities))

    unknown = report.unknown_wasi_imports
    if unknown:
        lines.append(
            f"There {to_be_form(len(unknown))} {len(unknown)} unknown wasi sys call{plural_s(len(unknown))}:"
        )
        for name in unknown:
            lines.append(f"\t{escape_name(name)}")

    if report.non_wasi_imports:
        lines.append("Unknown imports:")
        for module_name, field_name in report.non_wasi_imports:
            lines.append(f"\t{_qualified(module_name, field_name)}")

    if report.entry_points:
        hints = ", ".join(f"{name} ({KNOWN_ENTRY_POINTS[name]})" for name in report.entry_points)
        lines.append(f"Entry points: {hints}")

    if verbose and report.imports:
        lines.append("Imports:")
        for imp in report.imports:
            lines.append(f"\t{_qualified(imp.module_name, imp.field_name)} -> {imp.resolution}")

    return "\n".join(lines) + "\n"
