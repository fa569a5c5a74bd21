from kontrolleur import inspect
from kontrolleur.output import format_report
from kontrolleur.utils import escape_name
from wasm_builder import MAGIC, VERSION


def test_wasi_report(wasi_command_bytes):
    text = format_report(inspect(wasi_command_bytes))
    assert text.splitlines() == [
        "There are 4 total external API calls.",
        "This binary is expecting a WASI compliant runtime.",
        "\tWASI namespace: wasi_snapshot_preview1",
        "\tThe binary uses 3 WASI calls",
        "\tThe following system resource types are used:",
        "\t\tfile system, clock, process control",
        "Unknown imports:",
        "\tenv::memory",
        "Entry points: _start (WASI command)",
    ]


def test_verbose_lists_every_import(wasi_command_bytes):
    text = format_report(inspect(wasi_command_bytes), verbose=True)
    tail = text.splitlines()[-5:]
    assert tail == [
        "Imports:",
        "\twasi_snapshot_preview1::fd_write -> file system",
        "\twasi_snapshot_preview1::clock_time_get -> clock",
        "\twasi_snapshot_preview1::proc_exit -> process control",
        "\tenv::memory -> non-wasi",
    ]


def test_empty_module_report():
    assert format_report(inspect(MAGIC + VERSION), verbose=True) == (
        "There are 0 total external API calls.\n"
    )


def test_unknown_wasi_calls_and_singular_forms(builder):
    data = builder.import_function("wasi_unstable", "fd_mystery").build()
    text = format_report(inspect(data), verbose=True)
    assert "There is 1 total external API call." in text
    assert "\tThe binary uses 1 WASI call\n" in text
    assert "There is 1 unknown wasi sys call:\n\tfd_mystery\n" in text
    assert "resource types" not in text
    assert "\twasi_unstable::fd_mystery -> unknown\n" in text


def test_mixed_namespaces_are_listed(builder):
    data = (
        builder
        .import_function("wasi_unstable", "fd_read")
        .import_function("wasi_snapshot_preview1", "fd_write")
        .build()
    )
    text = format_report(inspect(data))
    assert "\tWASI namespace: wasi_unstable\n" in text
    assert "\tImports also reference: wasi_unstable, wasi_snapshot_preview1\n" in text


def test_names_are_escaped(builder):
    data = builder.import_function("env", "evil\x1b[2J\n").build()
    text = format_report(inspect(data))
    assert "\tenv::evil\\x1b[2J\\n\n" in text


def test_escape_name():
    assert escape_name("plain_name") == "plain_name"
    assert escape_name("ünïcode") == "ünïcode"
    assert escape_name("a\\b\t\0") == "a\\\\b\\t\\0"
    assert escape_name("\u200b") == "\\u200b"
