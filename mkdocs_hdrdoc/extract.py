#!/usr/bin/env python3
"""
Batch extract C header prototypes into API reference pages.

Usage:
    hdrdoc
    python -m mkdocs_hdrdoc.extract --input headers --output content/docs
    hdrdoc --page-ext .md --no-clean -v

Exit codes: 0 ok, 1 filesystem error, 2 input directory missing,
3 no header files, 4 no functions found in any header.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import dataclass

from .parser import scan_header
from .renderer import is_generated, render_document, render_index

log = logging.getLogger("mkdocs.plugins.hdrdoc")

DEFAULT_INPUT = "headers"
DEFAULT_OUTPUT = os.path.join("content", "docs")
INDEX_NAME = "getting-started"


class ExtractionError(Exception):
    exit_code = 1


class MissingInputDirectory(ExtractionError):
    exit_code = 2

    def __init__(self, path):
        super().__init__(f"Missing headers directory: {path}")
        self.path = path


class NoHeadersFound(ExtractionError):
    exit_code = 3

    def __init__(self, path, extension):
        super().__init__(f"No {extension} files found in {path}")
        self.path = path


class NoFunctionsFound(ExtractionError):
    exit_code = 4

    def __init__(self, headers):
        super().__init__(f"No function prototypes found in {headers} header file(s)")
        self.headers = headers


@dataclass(frozen=True)
class HeaderFile:
    path: str
    name: str
    stem: str
    text: str


@dataclass
class ExtractionReport:
    headers: int = 0
    documents: int = 0
    functions: int = 0
    undocumented: int = 0

    def summary(self):
        msg = (
            f"Generated {self.documents} API page(s) with {self.functions} function(s) "
            f"from {self.headers} header file(s)"
        )
        if self.undocumented:
            msg += f", {self.undocumented} undocumented"
        return msg

    def add(self, doc):
        self.documents += 1
        self.functions += len(doc.entries)
        self.undocumented += sum(1 for e in doc.entries if not e.has_doc)


# -- loading --


def discover_headers(input_dir, extension=".h"):
    if not os.path.isdir(input_dir):
        raise MissingInputDirectory(os.path.abspath(input_dir))
    root = os.path.realpath(input_dir)
    out = []
    for fn in sorted(os.listdir(root)):
        path = os.path.join(root, fn)
        if fn.endswith(extension) and os.path.isfile(path):
            out.append(path)
    if not out:
        raise NoHeadersFound(root, extension)
    return out


def load_header(path):
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        text = f.read()
    name = os.path.basename(path)
    return HeaderFile(path=path, name=name, stem=os.path.splitext(name)[0], text=text)


def extract_header(header):
    """Scan and render one header, None when it declares no functions."""
    entries = scan_header(header.text)
    if not entries:
        log.info("hdrdoc: %s: no function prototypes, skipped", header.name)
        return None
    for e in entries:
        if not e.has_doc:
            log.warning("hdrdoc: %s:%d: %s has no doc comment", header.name, e.line, e.name)
    return render_document(header, entries)


def extract_documents(headers):
    """Run the pipeline in memory over loaded headers.

    Returns the rendered documents and the aggregate report.
    """
    report = ExtractionReport()
    documents = []
    for header in headers:
        report.headers += 1
        doc = extract_header(header)
        if doc is None:
            continue
        documents.append(doc)
        report.add(doc)
    return documents, report


# -- writing --


def _is_generated(path):
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return is_generated(f.read())


def page_stem(title, taken):
    """File stem for a header page that does not clash with ``taken``.

    The chosen stem is added to ``taken``.
    """
    stem = title
    n = 1
    while stem in taken:
        stem = f"{title}-h" if n == 1 else f"{title}-h{n}"
        n += 1
    if stem != title:
        log.warning("hdrdoc: page name %s is taken, writing %s instead", title, stem)
    taken.add(stem)
    return stem


def reset_output(output_dir, page_ext):
    """Remove pages a previous run generated; hand-written pages stay."""
    removed = 0
    for fn in sorted(os.listdir(output_dir)):
        path = os.path.join(output_dir, fn)
        if fn.endswith(page_ext) and os.path.isfile(path) and _is_generated(path):
            os.remove(path)
            removed += 1
    if removed:
        log.debug("hdrdoc: removed %d stale page(s) from %s", removed, output_dir)
    return removed


def write_text(path, text):
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)


def run(
    input_dir=DEFAULT_INPUT,
    output_dir=DEFAULT_OUTPUT,
    *,
    extension=".h",
    page_ext=".mdx",
    clean=True,
):
    paths = discover_headers(input_dir, extension)
    log.info("hdrdoc: %d header file(s) in %s", len(paths), input_dir)

    os.makedirs(output_dir, exist_ok=True)
    if clean:
        reset_output(output_dir, page_ext)

    report = ExtractionReport()
    taken = {INDEX_NAME}
    for path in paths:
        header = load_header(path)
        report.headers += 1
        doc = extract_header(header)
        if doc is None:
            continue
        dest = os.path.join(output_dir, page_stem(doc.title, taken) + page_ext)
        write_text(dest, doc.text)
        report.add(doc)
        log.info("hdrdoc: %s -> %s (%d functions)", header.name, dest, len(doc.entries))

    label = os.path.basename(os.path.normpath(input_dir)) or DEFAULT_INPUT
    write_text(os.path.join(output_dir, INDEX_NAME + page_ext), render_index(label))

    if report.functions == 0:
        raise NoFunctionsFound(report.headers)
    return report


def main(argv=None):
    p = argparse.ArgumentParser(
        prog="hdrdoc", description="Generate API reference pages from C header doc comments"
    )
    p.add_argument(
        "--input", default=DEFAULT_INPUT, help=f"Header directory (default: {DEFAULT_INPUT})"
    )
    p.add_argument(
        "--output", default=DEFAULT_OUTPUT, help=f"Output directory (default: {DEFAULT_OUTPUT})"
    )
    p.add_argument("--ext", default=".h", help="Header file extension (default: .h)")
    p.add_argument("--page-ext", default=".mdx", help="Generated page extension (default: .mdx)")
    p.add_argument(
        "--no-clean", action="store_true", help="Keep pages generated by a previous run"
    )
    verbosity = p.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug output")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only warnings and errors")
    args = p.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.WARNING if args.quiet else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)-7s -  %(message)s")

    ext = args.ext if args.ext.startswith(".") else f".{args.ext}"
    page_ext = args.page_ext if args.page_ext.startswith(".") else f".{args.page_ext}"

    try:
        report = run(
            args.input, args.output, extension=ext, page_ext=page_ext, clean=not args.no_clean
        )
    except ExtractionError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return exc.exit_code
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(report.summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())
