"""
Read and update ``export NAME=value`` lines in a user shell profile.
"""

from __future__ import annotations

import re
from pathlib import Path

EXPORT_RE = re.compile(
    r"""^\s*export\s+(?P<name>[A-Za-z_][A-Za-z0-9_]*)=
        (?:"(?P<dq>(?:[^"\\]|\\.)*)"|'(?P<sq>[^']*)'|(?P<bare>[^\s#]*))""",
    re.VERBOSE,
)

# Characters that stay special inside double quotes
DQ_ESCAPE_RE = re.compile(r'\\([\\"$`])')


def parse_export(line: str) -> tuple[str, str] | None:
    """Return (name, value) for an export line, handling quoting variants."""
    m = EXPORT_RE.match(line)
    if not m:
        return None
    for group in ("dq", "sq", "bare"):
        value = m.group(group)
        if value is not None:
            if group == "dq":
                value = DQ_ESCAPE_RE.sub(r"\1", value)
            return m.group("name"), value
    return m.group("name"), ""


def format_export(name: str, value: str) -> str:
    escaped = re.sub(r'([\\"$`])', r"\\\1", value)
    return f'export {name}="{escaped}"'


class ShellProfile:
    """A shell profile file such as ``~/.bashrc``."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def lines(self) -> list[str]:
        if not self.path.is_file():
            return []
        return self.path.read_text(encoding="utf-8", errors="replace").splitlines()

    def get_export(self, name: str) -> str | None:
        """Value of the last ``export name=...`` line, or None."""
        value = None
        for line in self.lines():
            parsed = parse_export(line)
            if parsed and parsed[0] == name:
                value = parsed[1]
        return value

    def upsert_exports(self, exports: dict[str, str], header: str | None = None) -> None:
        """Remove any existing lines for the given names, then append them.

        Other lines are left as they are. Running it twice with the same
        values leaves the file unchanged.
        """
        if not exports:
            return
        kept = []
        for line in self.lines():
            parsed = parse_export(line)
            managed = (parsed and parsed[0] in exports) or (header and line.strip() == f"# {header}")
            if not managed:
                kept.append(line)
            elif kept and not kept[-1].strip():
                # separator written in front of the previous block
                kept.pop()
        block = [f"# {header}"] if header else []
        block += [format_export(name, value) for name, value in exports.items()]
        if kept and kept[-1].strip():
            kept.append("")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("\n".join(kept + block) + "\n", encoding="utf-8")
