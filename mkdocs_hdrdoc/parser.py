"""
Lexical scanner for C header prototypes and their doc comments.

This is pattern matching over the header text, not a C parser:
  - pass A pairs a ``/** ... */`` block with the prototype right after it
  - pass B picks up the remaining bare prototypes, one per line

Also includes the ``@tag`` comment parser that turns a doc block into a
StructuredComment.
"""

from __future__ import annotations

import logging
import re
import textwrap
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto

log = logging.getLogger("mkdocs.plugins.hdrdoc")


@dataclass
class Parameter:
    name: str
    description: str = ""
    direction: str = ""


@dataclass
class StructuredComment:
    brief: str | None = None
    description: str | None = None
    parameters: list[Parameter] = field(default_factory=list)
    returns: str | None = None
    errors: list[str] = field(default_factory=list)
    example: str | None = None
    since: str | None = None


@dataclass
class FunctionEntry:
    name: str
    signature: str
    doc: StructuredComment | None = None
    line: int = 0

    @property
    def has_doc(self):
        return self.doc is not None


# -- comment cleaning --

_MARKER_RE = re.compile(r"^\s*\*(?!/) ?")


def clean_comment(body):
    """Strip the leading `` * `` continuation marker from every line.

    Indentation after the marker is kept so example code survives; blank
    lines at either end are dropped.
    """
    lines = [_MARKER_RE.sub("", ln, count=1).rstrip() for ln in body.split("\n")]
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return "\n".join(lines)


# -- @tag comment parser --

_TAG_RE = re.compile(r"^@(\w+)\b\s*(.*)$")
_ANY_TAG_RE = re.compile(r"^@\w")
# Tags written on one line, e.g. "@brief Opens. @param p Path."
_INLINE_TAG_RE = re.compile(r"\s+(?=@(?:brief|param|returns?|error|since|example)\b)")
_PARAM_RE = re.compile(r"^(?:\[\s*([\w\s,]*?)\s*\]\s*)?(\S+)\s*(.*)$")

_TAGS = frozenset({"brief", "param", "return", "returns", "error", "since", "example"})


class _State(Enum):
    PROSE = auto()
    EXAMPLE = auto()


def _parse_param(rest):
    m = _PARAM_RE.match(rest)
    if not m:
        return None
    direction = re.sub(r"\s+", "", m.group(1) or "")
    return Parameter(name=m.group(2), description=m.group(3).strip(), direction=direction)


def _finish_example(lines):
    return textwrap.dedent("\n".join(lines)).strip()


def parse_comment(text):
    doc = StructuredComment()
    prose = []
    example = []
    state = _State.PROSE

    pending = deque(text.split("\n"))
    while pending:
        line = pending.popleft()
        stripped = line.strip()

        if state is _State.EXAMPLE:
            if not _ANY_TAG_RE.match(stripped):
                example.append(line)
                continue
            doc.example = _finish_example(example)
            example = []
            state = _State.PROSE

        if not stripped:
            continue

        head, *tail = _INLINE_TAG_RE.split(stripped)
        if tail:
            pending.extendleft(reversed(tail))
            stripped = head

        m = _TAG_RE.match(stripped)
        tag = m.group(1) if m else None
        if tag not in _TAGS:
            prose.append(stripped)
            continue

        rest = m.group(2).strip()
        if tag == "brief":
            doc.brief = rest
        elif tag == "param":
            param = _parse_param(rest)
            if param is None:
                log.debug("hdrdoc: @param without a name, skipped")
                continue
            doc.parameters.append(param)
        elif tag in ("return", "returns"):
            doc.returns = rest
        elif tag == "error":
            doc.errors.append(rest)
        elif tag == "since":
            doc.since = rest
        elif tag == "example":
            state = _State.EXAMPLE
            example = [rest] if rest else []

    if state is _State.EXAMPLE:
        doc.example = _finish_example(example)

    if prose:
        doc.description = "\n".join(prose)
    return doc


# -- prototype scanner --

_PROTO = r"[A-Za-z_][\w \t\r\n*]*?\b[A-Za-z_]\w*\s*\([^;{]*\)\s*;"

# Body may not contain "*/", so one match never spans two comments
_DOCUMENTED_RE = re.compile(r"/\*\*((?:[^*]|\*(?!/))*)\*/\s*(" + _PROTO + ")")
_BARE_RE = re.compile(r"^(" + _PROTO.replace(r"\r\n", "") + ")", re.MULTILINE)
_FN_NAME_RE = re.compile(r"\b([A-Za-z_]\w*)\s*\(")
# Captures start with a letter, so directives and comments never reach this
_REJECT_RE = re.compile(r"^(?:typedef|struct|enum)\b")


def function_name(signature):
    m = _FN_NAME_RE.search(signature)
    return m.group(1) if m else "function"


def escape_signature(signature):
    return signature.replace("<", "&lt;").replace(">", "&gt;")


def _line_of(text, pos):
    return text.count("\n", 0, pos) + 1


def scan_header(text):
    """Find function prototypes in one header's text.

    Documented prototypes are collected first, so when a name also shows up
    as a bare prototype the documented entry wins. Later duplicates of a name
    are dropped.
    """
    entries = []
    seen = set()
    claimed = []

    def _add(sig, doc, pos):
        sig = sig.strip()
        name = function_name(sig)
        if name in seen:
            log.debug(
                "hdrdoc: duplicate prototype for %s at line %d dropped", name, _line_of(text, pos)
            )
            return
        seen.add(name)
        entries.append(
            FunctionEntry(
                name=name,
                signature=escape_signature(sig),
                doc=doc,
                line=_line_of(text, pos),
            )
        )

    for m in _DOCUMENTED_RE.finditer(text):
        claimed.append((m.start(), m.end()))
        sig = m.group(2)
        if _REJECT_RE.match(sig):
            continue
        _add(sig, parse_comment(clean_comment(m.group(1))), m.start(2))

    for m in _BARE_RE.finditer(text):
        if any(start <= m.start() < end for start, end in claimed):
            continue
        sig = m.group(1)
        if _REJECT_RE.match(sig):
            continue
        _add(sig, None, m.start(1))

    return entries
