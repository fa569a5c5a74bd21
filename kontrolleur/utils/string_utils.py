"""
String utility functions.
"""


def escape_name(s: str) -> str:
    """
    Escape an import or export name for terminal output.

    Names come straight from the binary, so control characters are shown
    as escapes instead of being written to the terminal.

    Args:
        s: Input string

    Returns:
        Escaped string containing only printable characters
    """
    result = []
    for char in s:
        if char == '\\':
            result.append('\\\\')
        elif char == '\n':
            result.append('\\n')
        elif char == '\r':
            result.append('\\r')
        elif char == '\t':
            result.append('\\t')
        elif char == '\0':
            result.append('\\0')
        elif not char.isprintable():
            code = ord(char)
            if code < 0x100:
                result.append(f'\\x{code:02x}')
            elif code < 0x10000:
                result.append(f'\\u{code:04x}')
            else:
                result.append(f'\\U{code:08x}')
        else:
            result.append(char)
    return ''.join(result)


def to_be_form(count: int) -> str:
    """Return ``is`` for a count of one, ``are`` otherwise."""
    return "is" if count == 1 else "are"


def plural_s(count: int) -> str:
    return "" if count == 1 else "s"
