import pytest

from kontrolleur.errors import (
    BadMagicError, BadVersionError, DecodeError, InvalidEncodingError,
    IntegerOverflowError, TruncatedError, UnknownImportKindError, UnknownSectionIdError,
)
from kontrolleur.formats import decode_module
from kontrolleur.formats.wasm_structures import (
    ExternalKind, FunctionImport, GlobalImport, Limits, MemoryImport, TableImport,
    ValueType, WasmSectionId,
)
from wasm_builder import MAGIC, VERSION, ModuleBuilder, name, section, uleb


def test_empty_module():
    module = decode_module(MAGIC + VERSION)
    assert module.sections == ()
    assert module.imports == ()
    assert module.exports == ()


def test_decodes_every_import_kind(builder):
    data = (
        builder
        .type_section()
        .import_function("wasi_snapshot_preview1", "fd_write", type_index=0)
        .import_table("env", "table", minimum=1, maximum=10)
        .import_memory("env", "memory", minimum=17)
        .import_global("env", "stack_pointer", value_type=0x7F, mutable=True)
        .build()
    )
    imports = decode_module(data).imports

    assert [(i.module_name, i.field_name, i.kind) for i in imports] == [
        ("wasi_snapshot_preview1", "fd_write", ExternalKind.FUNCTION),
        ("env", "table", ExternalKind.TABLE),
        ("env", "memory", ExternalKind.MEMORY),
        ("env", "stack_pointer", ExternalKind.GLOBAL),
    ]
    assert imports[0].descriptor == FunctionImport(type_index=0)
    assert imports[1].descriptor == TableImport(ValueType.FUNCREF, Limits(1, 10))
    assert imports[2].descriptor == MemoryImport(Limits(17))
    assert imports[3].descriptor == GlobalImport(ValueType.I32, mutable=True)


def test_shared_and_64bit_memory_limits(builder):
    shared = builder.import_raw("env", "memory", b"\x02\x03" + uleb(1) + uleb(2)).build()
    assert decode_module(shared).imports[0].descriptor == MemoryImport(Limits(1, 2, shared=True))

    big = ModuleBuilder().import_raw("env", "memory", b"\x02\x04" + uleb(2**40)).build()
    assert decode_module(big).imports[0].descriptor == MemoryImport(Limits(2**40, is_64=True))


def test_exports_and_sections(wasi_command_bytes):
    module = decode_module(wasi_command_bytes)
    assert [(e.name, e.kind, e.index) for e in module.exports] == [
        ("_start", ExternalKind.FUNCTION, 3),
        ("memory", ExternalKind.MEMORY, 0),
    ]
    assert [s.id for s in module.sections] == [
        WasmSectionId.TYPE, WasmSectionId.IMPORT, WasmSectionId.EXPORT, WasmSectionId.CUSTOM,
    ]
    assert module.sections[0].offset == 10


def test_import_order_is_preserved(builder):
    fields = ["random_get", "args_get", "fd_read", "sock_accept", "environ_get"]
    for field in fields:
        builder.import_function("wasi_snapshot_preview1", field)
    imports = decode_module(builder.build()).imports
    assert [i.field_name for i in imports] == fields


def test_last_import_section_wins():
    first = uleb(1) + name("env") + name("a") + b"\x00\x00"
    second = uleb(1) + name("env") + name("b") + b"\x00\x00"
    data = MAGIC + VERSION + section(2, first) + section(2, second)
    assert [i.field_name for i in decode_module(data).imports] == ["b"]


def test_opaque_sections_are_skipped():
    # Code section body is garbage; it must never be interpreted.
    data = MAGIC + VERSION + section(10, b"\xff\xff\xff") + section(12, uleb(0))
    module = decode_module(data)
    assert [s.id for s in module.sections] == [10, 12]


def test_trailing_custom_section_is_accepted(wasi_command_bytes):
    data = wasi_command_bytes + section(0, name("producers") + b"\x00")
    assert len(decode_module(data).imports) == 4


@pytest.mark.parametrize("index", range(4))
def test_bad_magic(wasi_command_bytes, index):
    data = bytearray(wasi_command_bytes)
    data[index] ^= 0xFF
    with pytest.raises(BadMagicError):
        decode_module(bytes(data))


def test_bad_magic_independent_of_content():
    with pytest.raises(BadMagicError):
        decode_module(b"\x7fELF" + b"\x00" * 64)


@pytest.mark.parametrize("data, error", [
    (b"", TruncatedError),
    (b"\x00as", TruncatedError),
    (b"PK", BadMagicError),
])
def test_short_input(data, error):
    with pytest.raises(error):
        decode_module(data)


def test_bad_version():
    with pytest.raises(BadVersionError):
        decode_module(MAGIC + b"\x02\x00\x00\x00")
    with pytest.raises(TruncatedError):
        decode_module(MAGIC + b"\x01\x00")


def test_unknown_section_id():
    with pytest.raises(UnknownSectionIdError) as excinfo:
        decode_module(MAGIC + VERSION + section(13, b""))
    assert excinfo.value.offset == 8


def test_section_size_beyond_buffer_is_truncated():
    # Declares a 4 GiB section; must fail without trying to read it.
    data = MAGIC + VERSION + b"\x0a" + uleb(0xFFFFFFFF) + b"\x00"
    with pytest.raises(TruncatedError):
        decode_module(data)


def test_section_size_overflow():
    data = MAGIC + VERSION + b"\x0a" + b"\xff\xff\xff\xff\x7f"
    with pytest.raises(IntegerOverflowError):
        decode_module(data)


def test_truncating_any_section_payload(wasi_command_bytes):
    module = decode_module(wasi_command_bytes)
    for sec in module.sections:
        end = sec.offset + sec.size
        with pytest.raises(TruncatedError):
            decode_module(wasi_command_bytes[:end - 1])


def test_entry_overrunning_its_section_is_truncated():
    # Count says two imports but the section only holds one.
    payload = uleb(2) + name("env") + name("f") + b"\x00\x00"
    data = MAGIC + VERSION + section(2, payload) + section(0, name("pad") + b"\x00" * 16)
    with pytest.raises(TruncatedError):
        decode_module(data)


def test_unknown_import_kind(builder):
    data = builder.import_raw("env", "tag", b"\x04\x00\x00").build()
    with pytest.raises(UnknownImportKindError):
        decode_module(data)


def test_unknown_export_kind(builder):
    data = builder.export("x", kind=9).build()
    with pytest.raises(UnknownImportKindError):
        decode_module(data)


@pytest.mark.parametrize("descriptor", [
    b"\x02\x08\x00",        # reserved limits flag
    b"\x01\x7f\x00\x00",    # table of i32
    b"\x03\x40\x00",        # unknown value type
    b"\x03\x7f\x02",        # mutability flag out of range
])
def test_malformed_descriptors(builder, descriptor):
    data = builder.import_raw("env", "x", descriptor).build()
    with pytest.raises(InvalidEncodingError):
        decode_module(data)


def test_invalid_utf8_name():
    payload = uleb(1) + b"\x02\xc3\x28" + name("f") + b"\x00\x00"
    with pytest.raises(InvalidEncodingError):
        decode_module(MAGIC + VERSION + section(2, payload))


def test_all_errors_share_base_class():
    with pytest.raises(DecodeError):
        decode_module(b"garbage!")
