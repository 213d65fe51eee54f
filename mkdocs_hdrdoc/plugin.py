"""
MkDocs plugin serving API reference pages extracted from C headers.

Runs the header pipeline during ``on_config``, registers one generated page
per header (plus an overview page) during ``on_files``, and adds an
"API Reference" section to the navigation.
"""

from __future__ import annotations

import logging
import os

from mkdocs.config import config_options
from mkdocs.config.base import Config
from mkdocs.exceptions import PluginError
from mkdocs.plugins import BasePlugin
from mkdocs.structure.files import File

from .extract import (
    ExtractionError,
    NoFunctionsFound,
    discover_headers,
    extract_documents,
    load_header,
    page_stem,
)
from .renderer import render_index

log = logging.getLogger("mkdocs.plugins.hdrdoc")


class HdrdocConfig(Config):
    input_dir = config_options.Type(str, default="headers")
    extension = config_options.Type(str, default=".h")
    output_dir = config_options.Type(str, default="api")
    nav_title = config_options.Type(str, default="API Reference")
    index = config_options.Type(bool, default=True)
    strict = config_options.Type(bool, default=True)


class HdrdocPlugin(BasePlugin[HdrdocConfig]):

    def __init__(self):
        super().__init__()
        self._pages = {}
        self._titles = {}
        self.report = None

    def _input_dir(self, config_dir):
        root = self.config["input_dir"]
        if not os.path.isabs(root):
            root = os.path.normpath(os.path.join(config_dir, root))
        return root

    def _extract(self, input_dir):
        headers = [load_header(p) for p in discover_headers(input_dir, self.config["extension"])]
        documents, report = extract_documents(headers)
        if report.functions == 0:
            raise NoFunctionsFound(report.headers)
        return documents, report

    def _register(self, documents, input_dir):
        out_dir = self.config["output_dir"].strip("/")
        taken = {"index"} if self.config["index"] else set()
        for doc in documents:
            uri = f"{out_dir}/{page_stem(doc.title, taken)}.md"
            self._pages[uri] = doc.text
            self._titles[uri] = doc.source
        if self.config["index"]:
            label = os.path.basename(os.path.normpath(input_dir))
            self._pages[f"{out_dir}/index.md"] = render_index(label)

    def _nav_tree(self):
        out_dir = self.config["output_dir"].strip("/")
        tree = []
        idx = f"{out_dir}/index.md"
        if idx in self._pages:
            tree.append({"Overview": idx})
        for uri in sorted(self._titles):
            tree.append({self._titles[uri]: uri})
        return tree

    def _inject_nav(self, config):
        if not self._pages:
            return
        title = self.config["nav_title"]
        section = {title: self._nav_tree()}
        nav = config.get("nav")
        if nav is None:
            config["nav"] = [section]
            return
        for i, item in enumerate(nav):
            if isinstance(item, dict) and title in item:
                nav[i] = section
                return
        nav.append(section)

    # ── MkDocs lifecycle hooks ──

    def on_config(self, config, **kwargs):
        config_dir = os.path.dirname(config.get("config_file_path", "") or "") or os.getcwd()
        self._pages.clear()
        self._titles.clear()
        self.report = None

        input_dir = self._input_dir(config_dir)
        try:
            documents, self.report = self._extract(input_dir)
        except ExtractionError as exc:
            if self.config["strict"]:
                raise PluginError(f"hdrdoc: {exc}") from exc
            log.error("hdrdoc: %s", exc)
            return config

        self._register(documents, input_dir)
        self._inject_nav(config)
        log.info("hdrdoc: %s", self.report.summary())
        return config

    def on_files(self, files, *, config, **kwargs):
        for uri in sorted(self._pages):
            f = File.generated(config, uri, content=self._pages[uri])
            f.edit_uri = None
            files.append(f)
        return files
