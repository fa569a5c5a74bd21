"""
WebAssembly format structure definitions.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Union


# WebAssembly Magic and version
WASM_MAGIC = b'\x00asm'
WASM_VERSION = 1


class WasmSectionId(IntEnum):
    """WebAssembly section IDs."""
    CUSTOM = 0
    TYPE = 1
    IMPORT = 2
    FUNCTION = 3
    TABLE = 4
    MEMORY = 5
    GLOBAL = 6
    EXPORT = 7
    START = 8
    ELEMENT = 9
    CODE = 10
    DATA = 11
    DATA_COUNT = 12


MAX_SECTION_ID = max(WasmSectionId)


class ExternalKind(IntEnum):
    """Kind tag shared by import and export entries."""
    FUNCTION = 0
    TABLE = 1
    MEMORY = 2
    GLOBAL = 3


class ValueType(IntEnum):
    """Binary encoding of value and reference types."""
    I32 = 0x7F
    I64 = 0x7E
    F32 = 0x7D
    F64 = 0x7C
    V128 = 0x7B
    FUNCREF = 0x70
    EXTERNREF = 0x6F


REFERENCE_TYPES = frozenset({ValueType.FUNCREF, ValueType.EXTERNREF})

# Limits flag bits
LIMITS_HAS_MAX = 0x01
LIMITS_SHARED = 0x02
LIMITS_64 = 0x04


@dataclass(frozen=True)
class WasmSection:
    """WebAssembly section header."""
    id: int
    size: int
    offset: int  # File offset where section content starts


@dataclass(frozen=True)
class Limits:
    """Memory or table limits."""
    minimum: int
    maximum: Optional[int] = None
    shared: bool = False
    is_64: bool = False


@dataclass(frozen=True)
class FunctionImport:
    type_index: int


@dataclass(frozen=True)
class TableImport:
    element_type: ValueType
    limits: Limits


@dataclass(frozen=True)
class MemoryImport:
    limits: Limits


@dataclass(frozen=True)
class GlobalImport:
    value_type: ValueType
    mutable: bool


ImportDescriptor = Union[FunctionImport, TableImport, MemoryImport, GlobalImport]


@dataclass(frozen=True)
class ImportEntry:
    """A value the host must supply, under a module (namespace) and field name."""
    module_name: str
    field_name: str
    kind: ExternalKind
    descriptor: ImportDescriptor


@dataclass(frozen=True)
class ExportEntry:
    """A value the module makes available to the host."""
    name: str
    kind: ExternalKind
    index: int
