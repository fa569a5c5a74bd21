"""
Import classifier.

Maps each decoded import to a capability category using the static WASI
tables, and aggregates the results in declaration order.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Tuple

from ..formats.wasm_structures import ImportEntry
from .categories import CapabilityCategory, ImportStatus
from .wasi_tables import NamespaceTable, WASI_NAMESPACES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassifiedImport:
    """One import with the category it resolved to."""
    module_name: str
    field_name: str
    status: ImportStatus
    category: Optional[CapabilityCategory] = None

    @property
    def resolution(self) -> str:
        """Category label, or ``unknown`` / ``non-wasi`` when unresolved."""
        if self.status == ImportStatus.WASI:
            return self.category.label
        return self.status.value


@dataclass(frozen=True)
class ClassificationResult:
    """
    Aggregated classification of a module's imports.

    Attributes:
        is_wasi_binary: At least one import used a recognized WASI namespace
        wasi_namespace: First recognized namespace seen, if any
        wasi_namespaces: Every recognized namespace seen, first-seen order
        capabilities: Categories in first-occurrence order, no duplicates
        unknown_wasi_imports: Field names under a WASI namespace with no table entry
        non_wasi_imports: (module, field) pairs outside every WASI namespace
        imports: Every import with its resolution, declaration order
    """
    is_wasi_binary: bool
    wasi_namespace: Optional[str]
    wasi_namespaces: Tuple[str, ...]
    capabilities: Tuple[CapabilityCategory, ...]
    unknown_wasi_imports: Tuple[str, ...]
    non_wasi_imports: Tuple[Tuple[str, str], ...]
    imports: Tuple[ClassifiedImport, ...]


class CapabilityClassifier:
    """Classifies imports against a table of recognized WASI namespaces."""

    def __init__(self, namespaces: Mapping[str, NamespaceTable] = WASI_NAMESPACES):
        self._namespaces = namespaces

    def classify_import(self, entry: ImportEntry) -> ClassifiedImport:
        table = self._namespaces.get(entry.module_name)
        if table is None:
            return ClassifiedImport(entry.module_name, entry.field_name, ImportStatus.NON_WASI)

        category = table.lookup(entry.field_name, entry.kind)
        if category is None:
            logger.debug("Unrecognized WASI import %s::%s", entry.module_name, entry.field_name)
            return ClassifiedImport(
                entry.module_name, entry.field_name,
                ImportStatus.UNKNOWN_WASI, CapabilityCategory.UNKNOWN,
            )
        return ClassifiedImport(entry.module_name, entry.field_name, ImportStatus.WASI, category)

    def classify(self, imports: Iterable[ImportEntry]) -> ClassificationResult:
        """
        Classify imports in declaration order.

        Args:
            imports: Decoded import entries

        Returns:
            ClassificationResult with deduplicated capabilities
        """
        classified: List[ClassifiedImport] = []
        namespaces: List[str] = []
        capabilities: List[CapabilityCategory] = []
        unknown_wasi: List[str] = []
        non_wasi: List[Tuple[str, str]] = []

        for entry in imports:
            result = self.classify_import(entry)
            classified.append(result)

            if result.status == ImportStatus.NON_WASI:
                non_wasi.append((entry.module_name, entry.field_name))
                continue

            if entry.module_name not in namespaces:
                namespaces.append(entry.module_name)

            if result.status == ImportStatus.UNKNOWN_WASI:
                unknown_wasi.append(entry.field_name)
            elif result.category not in capabilities:
                capabilities.append(result.category)

        if len(namespaces) > 1:
            logger.info("Imports span several WASI namespaces: %s", ", ".join(namespaces))

        return ClassificationResult(
            is_wasi_binary=bool(namespaces),
            wasi_namespace=namespaces[0] if namespaces else None,
            wasi_namespaces=tuple(namespaces),
            capabilities=tuple(capabilities),
            unknown_wasi_imports=tuple(unknown_wasi),
            non_wasi_imports=tuple(non_wasi),
            imports=tuple(classified),
        )


def classify_imports(imports: Iterable[ImportEntry]) -> ClassificationResult:
    """Classify imports against the built-in WASI tables."""
    return CapabilityClassifier().classify(imports)
