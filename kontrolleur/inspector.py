"""
Single-call inspection pipeline: bytes to Report.
"""

import logging

from .capabilities.classifier import CapabilityClassifier
from .formats.wasm import decode_module
from .io.byte_cursor import BytesLike
from .output.report import Report, ReportBuilder

logger = logging.getLogger(__name__)


def inspect(data: BytesLike) -> Report:
    """
    Decode a WebAssembly binary and report the host capabilities it expects.

    The call holds no shared state, so separate files may be inspected from
    separate threads or processes.

    Args:
        data: Complete contents of a .wasm file

    Returns:
        Immutable Report

    Raises:
        DecodeError: If the binary is malformed; no partial report is produced
    """
    module = decode_module(data)
    classification = CapabilityClassifier().classify(module.imports)
    report = ReportBuilder().build(classification, module.exports)
    logger.debug(
        "Classified %d imports (wasi=%s, capabilities=%s)",
        report.total_imports, report.is_wasi_binary,
        ", ".join(c.value for c in report.capabilities),
    )
    return report
