"""
Inspection report.

The Report is the single immutable value handed to callers once a module
has been decoded and classified.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from ..capabilities.categories import CapabilityCategory, ImportStatus
from ..capabilities.classifier import ClassificationResult, ClassifiedImport
from ..formats.wasm_structures import ExportEntry, ExternalKind

# Exported functions a WASI runtime looks for when starting a module.
KNOWN_ENTRY_POINTS = {
    "_start": "WASI command",
    "_initialize": "WASI reactor",
}


@dataclass(frozen=True)
class Report:
    """Capabilities a WebAssembly module expects from its host."""
    is_wasi_binary: bool
    wasi_namespace: Optional[str]
    capabilities: Tuple[CapabilityCategory, ...]
    unknown_wasi_imports: Tuple[str, ...]
    non_wasi_imports: Tuple[Tuple[str, str], ...]
    wasi_namespaces: Tuple[str, ...] = ()
    imports: Tuple[ClassifiedImport, ...] = ()
    entry_points: Tuple[str, ...] = ()

    @property
    def total_imports(self) -> int:
        return len(self.imports)

    @property
    def wasi_call_count(self) -> int:
        """Imports declared under a recognized WASI namespace."""
        return sum(1 for imp in self.imports if imp.status != ImportStatus.NON_WASI)


class ReportBuilder:
    """Wraps a classification result and decoder metadata into a Report."""

    @staticmethod
    def entry_points(exports: Iterable[ExportEntry]) -> Tuple[str, ...]:
        return tuple(
            export.name for export in exports
            if export.kind == ExternalKind.FUNCTION and export.name in KNOWN_ENTRY_POINTS
        )

    def build(self, classification: ClassificationResult, exports: Iterable[ExportEntry] = ()) -> Report:
        return Report(
            is_wasi_binary=classification.is_wasi_binary,
            wasi_namespace=classification.wasi_namespace,
            capabilities=classification.capabilities,
            unknown_wasi_imports=classification.unknown_wasi_imports,
            non_wasi_imports=classification.non_wasi_imports,
            wasi_namespaces=classification.wasi_namespaces,
            imports=classification.imports,
            entry_points=self.entry_points(exports),
        )
