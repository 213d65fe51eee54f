"""
mkdocs-hdrdoc: C header API reference pages.

Scans a directory of C headers for function prototypes and their
``/** ... @tag ... */`` doc comments, and renders one Markdown/MDX page per
header, either as a standalone batch tool or as a MkDocs plugin.
"""

__version__ = "0.3.0"
