"""
Capability classification of WebAssembly imports.

This module provides:
- CapabilityClassifier: maps imports to capability categories
- WASI_NAMESPACES: the static namespace/field tables it uses
"""

from .categories import CapabilityCategory, ImportStatus
from .classifier import CapabilityClassifier, ClassificationResult, ClassifiedImport, classify_imports
from .wasi_tables import NamespaceTable, WASI_NAMESPACES

__all__ = [
    'CapabilityCategory', 'ImportStatus',
    'CapabilityClassifier', 'ClassificationResult', 'ClassifiedImport', 'classify_imports',
    'NamespaceTable', 'WASI_NAMESPACES',
]
