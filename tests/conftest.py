"""Test configuration ensuring the project source tree is importable."""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
TESTS = ROOT / "tests"

for path in (str(ROOT), str(TESTS)):
    if path not in sys.path:
        sys.path.insert(0, path)

from wasm_builder import ModuleBuilder  # noqa: E402


@pytest.fixture
def builder() -> ModuleBuilder:
    return ModuleBuilder()


@pytest.fixture
def wasi_command_bytes() -> bytes:
    """A small WASI command: writes to stdout, reads the clock, exports _start."""
    return (
        ModuleBuilder()
        .type_section()
        .import_function("wasi_snapshot_preview1", "fd_write")
        .import_function("wasi_snapshot_preview1", "clock_time_get")
        .import_function("wasi_snapshot_preview1", "proc_exit")
        .import_memory("env", "memory", minimum=1)
        .export("_start", kind=0, index=3)
        .export("memory", kind=2, index=0)
        .custom_section("name", b"\x01\x02\x03")
        .build()
    )
