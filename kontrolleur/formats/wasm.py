"""
WebAssembly (WASM) module decoder.

Walks the section table of a WebAssembly binary in a single forward pass.
The Import and Export sections are fully decoded; every other section,
custom sections included, is skipped using its declared size.
"""

import logging
from dataclasses import dataclass
from typing import List, Tuple

from ..errors import (
    BadMagicError, BadVersionError, TruncatedError, UnknownSectionIdError,
    UnknownImportKindError, InvalidEncodingError,
)
from ..io.byte_cursor import ByteCursor, BytesLike
from .wasm_structures import (
    WasmSection, WasmSectionId, ExternalKind, ValueType, Limits,
    ImportEntry, ExportEntry, ImportDescriptor,
    FunctionImport, TableImport, MemoryImport, GlobalImport,
    WASM_MAGIC, WASM_VERSION, MAX_SECTION_ID, REFERENCE_TYPES,
    LIMITS_HAS_MAX, LIMITS_SHARED, LIMITS_64,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodedModule:
    """Structured view of a WebAssembly binary, as far as inspection needs it."""
    sections: Tuple[WasmSection, ...]
    imports: Tuple[ImportEntry, ...]
    exports: Tuple[ExportEntry, ...]


class WasmModuleDecoder:
    """
    Decoder for WebAssembly binary modules.

    A decoder instance is bound to one buffer and is meant to be used once;
    call decode() to obtain a DecodedModule.
    """

    def __init__(self, data: BytesLike):
        self._cursor = ByteCursor(data)
        self._sections: List[WasmSection] = []
        self._imports: List[ImportEntry] = []
        self._exports: List[ExportEntry] = []

    def decode(self) -> DecodedModule:
        """
        Decode the module header and walk every section.

        Returns:
            DecodedModule holding the section headers, imports and exports

        Raises:
            DecodeError: On any malformed input
        """
        self._read_header()

        while not self._cursor.at_end():
            section, payload = self._read_section()
            self._sections.append(section)

            if section.id == WasmSectionId.IMPORT:
                # A repeated section replaces the earlier one.
                self._imports = self._parse_import_section(payload)
                self._check_consumed(section, payload)
            elif section.id == WasmSectionId.EXPORT:
                self._exports = self._parse_export_section(payload)
                self._check_consumed(section, payload)

        logger.debug(
            "Decoded %d sections, %d imports, %d exports",
            len(self._sections), len(self._imports), len(self._exports),
        )
        return DecodedModule(
            sections=tuple(self._sections),
            imports=tuple(self._imports),
            exports=tuple(self._exports),
        )

    def _read_header(self) -> None:
        """Validate the magic bytes and the binary format version."""
        cursor = self._cursor
        if cursor.remaining() < len(WASM_MAGIC):
            head = cursor.read_fixed_bytes(cursor.remaining())
            if WASM_MAGIC.startswith(head):
                raise TruncatedError("File ends inside the WebAssembly magic", cursor.offset)
            raise BadMagicError(f"Invalid WebAssembly magic: {head!r}", 0)

        magic = cursor.read_fixed_bytes(len(WASM_MAGIC))
        if magic != WASM_MAGIC:
            raise BadMagicError(f"Invalid WebAssembly magic: {magic!r}", 0)

        version = cursor.read_uint32()
        if version != WASM_VERSION:
            raise BadVersionError(f"Unsupported WebAssembly version: {version}", 4)

    def _read_section(self) -> Tuple[WasmSection, ByteCursor]:
        """Read a section header and return it with a cursor over its payload."""
        cursor = self._cursor
        id_offset = cursor.offset
        section_id = cursor.read_u8()
        if section_id > MAX_SECTION_ID:
            raise UnknownSectionIdError(f"Unknown section id {section_id}", id_offset)

        size = cursor.read_uvarint(32)
        if size > cursor.remaining():
            raise TruncatedError(
                f"Section {section_id} declares {size} bytes but only "
                f"{cursor.remaining()} remain",
                cursor.offset,
            )

        section = WasmSection(id=section_id, size=size, offset=cursor.offset)
        logger.debug("Section %d: %d bytes at 0x%X", section_id, size, section.offset)
        return section, cursor.read_sub_cursor(size)

    def _check_consumed(self, section: WasmSection, payload: ByteCursor) -> None:
        if not payload.at_end():
            logger.debug(
                "Ignoring %d trailing bytes in section %d",
                payload.remaining(), section.id,
            )

    def _read_kind(self, cursor: ByteCursor) -> ExternalKind:
        offset = cursor.offset
        tag = cursor.read_u8()
        try:
            return ExternalKind(tag)
        except ValueError:
            raise UnknownImportKindError(f"Unknown external kind 0x{tag:02X}", offset) from None

    def _read_value_type(self, cursor: ByteCursor) -> ValueType:
        offset = cursor.offset
        code = cursor.read_u8()
        try:
            return ValueType(code)
        except ValueError:
            raise InvalidEncodingError(f"Unknown value type 0x{code:02X}", offset) from None

    def _read_limits(self, cursor: ByteCursor) -> Limits:
        """Read a limits descriptor (flags, minimum, optional maximum)."""
        offset = cursor.offset
        flags = cursor.read_u8()
        if flags & ~(LIMITS_HAS_MAX | LIMITS_SHARED | LIMITS_64):
            raise InvalidEncodingError(f"Invalid limits flags 0x{flags:02X}", offset)

        is_64 = bool(flags & LIMITS_64)
        bits = 64 if is_64 else 32
        minimum = cursor.read_uvarint(bits)
        maximum = cursor.read_uvarint(bits) if flags & LIMITS_HAS_MAX else None
        return Limits(minimum=minimum, maximum=maximum,
                      shared=bool(flags & LIMITS_SHARED), is_64=is_64)

    def _read_import_descriptor(self, cursor: ByteCursor, kind: ExternalKind) -> ImportDescriptor:
        if kind == ExternalKind.FUNCTION:
            return FunctionImport(type_index=cursor.read_uvarint(32))

        if kind == ExternalKind.TABLE:
            offset = cursor.offset
            element_type = self._read_value_type(cursor)
            if element_type not in REFERENCE_TYPES:
                raise InvalidEncodingError(
                    f"Table element type must be a reference type, got {element_type.name}",
                    offset,
                )
            return TableImport(element_type=element_type, limits=self._read_limits(cursor))

        if kind == ExternalKind.MEMORY:
            return MemoryImport(limits=self._read_limits(cursor))

        value_type = self._read_value_type(cursor)
        offset = cursor.offset
        mutability = cursor.read_u8()
        if mutability not in (0, 1):
            raise InvalidEncodingError(f"Invalid global mutability flag {mutability}", offset)
        return GlobalImport(value_type=value_type, mutable=bool(mutability))

    def _parse_import_section(self, cursor: ByteCursor) -> List[ImportEntry]:
        """Parse the import section payload into entries, in declaration order."""
        count = cursor.read_uvarint(32)
        imports = []
        for _ in range(count):
            module_name = cursor.read_utf8_string()
            field_name = cursor.read_utf8_string()
            kind = self._read_kind(cursor)
            descriptor = self._read_import_descriptor(cursor, kind)
            imports.append(ImportEntry(
                module_name=module_name,
                field_name=field_name,
                kind=kind,
                descriptor=descriptor,
            ))
        return imports

    def _parse_export_section(self, cursor: ByteCursor) -> List[ExportEntry]:
        """Parse the export section payload into entries."""
        count = cursor.read_uvarint(32)
        exports = []
        for _ in range(count):
            name = cursor.read_utf8_string()
            kind = self._read_kind(cursor)
            index = cursor.read_uvarint(32)
            exports.append(ExportEntry(name=name, kind=kind, index=index))
        return exports


def decode_module(data: BytesLike) -> DecodedModule:
    """Decode a WebAssembly binary held in memory."""
    return WasmModuleDecoder(data).decode()
