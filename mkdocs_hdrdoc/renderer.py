"""
Markdown/MDX renderer for scanned header functions.

Takes the FunctionEntry list of one header and turns it into a single page:
front matter, provenance notice, table of contents, then one anchored
section per function with signature, parameter table, returns, errors and
example. Output is a pure function of the input, so re-rendering the same
entries gives byte-identical text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from .parser import FunctionEntry

GENERATED_MARKER = "Auto-generated from"

# Provenance line directly after the front matter of a generated page
_GENERATED_RE = re.compile(
    r"\A---\n(?:.*\n)*?---\n\n> Auto-generated from `[^`\n]+`\. Do not edit by hand\.$",
    re.MULTILINE,
)

_SLUG_RE = re.compile(r"[^a-z0-9]+")


@dataclass
class RenderedDocument:
    title: str
    source: str
    entries: list[FunctionEntry] = field(default_factory=list)
    text: str = ""


def slugify(name):
    """Anchor id for a function name: lowercase, non-alnum runs become ``-``."""
    slug = _SLUG_RE.sub("-", name.lower()).strip("-")
    return slug or "function"


def sort_entries(entries):
    # alphabetical first, case breaks ties; independent of the process locale
    return sorted(entries, key=lambda e: (e.name.casefold(), e.name.swapcase()))


def is_generated(text):
    return _GENERATED_RE.match(text) is not None


def _heading(text, level):
    return f"{'#' * level} {text}"


def _cell(text):
    return " ".join(text.split()).replace("|", "\\|")


def _fence(code, language="c"):
    return [f"```{language}", code, "```"]


def _front_matter(title, description):
    return ["---", f"title: {title}", f"description: {description}", "---"]


def _param_table(params):
    lines = ["| Name | Description |", "| --- | --- |"]
    for p in params:
        name = f"`{p.name}`"
        if p.direction:
            name += f" ({p.direction})"
        lines.append(f"| {name} | {_cell(p.description)} |")
    return lines


def render_entry(entry):
    parts = [f'<a id="{slugify(entry.name)}"></a>', "", _heading(entry.name, 2), ""]

    doc = entry.doc
    if doc is None:
        parts += [
            "> **Warning:** This function has no documentation. "
            "Add a `/** ... */` doc comment above its prototype.",
            "",
        ]

    if doc is not None and doc.brief:
        parts += [f"**{doc.brief}**", ""]
    if doc is not None and doc.since:
        parts += [f"*Since {doc.since}*", ""]
    if doc is not None and doc.description:
        parts += [doc.description, ""]

    parts += _fence(entry.signature)
    parts.append("")

    if doc is None:
        return "\n".join(parts)

    if doc.parameters:
        parts += [_heading("Parameters", 3), ""]
        parts += _param_table(doc.parameters)
        parts.append("")
    if doc.returns is not None:
        parts += [_heading("Returns", 3), ""]
        if doc.returns:
            parts += [doc.returns, ""]
    if doc.errors:
        parts += [_heading("Errors", 3), ""]
        parts += [f"- {err}" for err in doc.errors]
        parts.append("")
    if doc.example:
        parts += [_heading("Example", 3), ""]
        parts += _fence(doc.example)
        parts.append("")

    return "\n".join(parts)


def render_page(title, source, entries):
    """Render one header page.

    ``entries`` are expected sorted and deduplicated; the table of contents
    follows their order.
    """
    parts = _front_matter(title, f"API reference for {source}")
    parts += ["", f"> {GENERATED_MARKER} `{source}`. Do not edit by hand.", ""]

    parts += [_heading("Contents", 2), ""]
    parts += [f"- [{e.name}](#{slugify(e.name)})" for e in entries]
    parts.append("")

    for entry in entries:
        parts += ["---", "", render_entry(entry)]

    return "\n".join(parts).rstrip("\n") + "\n"


def render_document(header, entries):
    entries = sort_entries(entries)
    return RenderedDocument(
        title=header.stem,
        source=header.name,
        entries=entries,
        text=render_page(header.stem, header.name, entries),
    )


def render_index(input_label="headers"):
    lines = _front_matter("Getting Started", "How this API reference is generated")
    lines += [
        "",
        f"This site is **auto-generated** from C header files in `/{input_label}`.",
        "",
        f"- Edit comments in `{input_label}/*.h`",
        "- Run `hdrdoc` to regenerate the pages",
        "- Pages appear under the header file name in the sidebar",
    ]
    return "\n".join(lines) + "\n"
