"""Rendering of collected symbols as a plain list or a linker version script."""

from collections.abc import Iterable
from enum import Enum
from typing import TextIO


class OutputMode(str, Enum):
    PLAIN = "plain"
    VERSION_SCRIPT = "version-script"


def render_plain(symbols: Iterable[str]) -> str:
    return "".join(f"{name}\n" for name in symbols)


def render_version_script(symbols: Iterable[str]) -> str:
    """Export ``symbols`` and hide everything else.

    The ``global:`` section is left out when there are no symbols; the
    ``local: *;`` catch-all is always present.
    """
    names = list(symbols)
    lines = ["{"]
    if names:
        lines.append("    global:")
        lines.extend(f"        {name};" for name in names)
    lines.append("    local:")
    lines.append("        *;")
    lines.append("};")
    return "\n".join(lines) + "\n"


def render(symbols: Iterable[str], mode: OutputMode = OutputMode.PLAIN) -> str:
    if mode == OutputMode.VERSION_SCRIPT:
        return render_version_script(symbols)
    return render_plain(symbols)


def write(symbols: Iterable[str], mode: OutputMode, stream: TextIO) -> None:
    stream.write(render(symbols, mode))
