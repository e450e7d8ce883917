"""The info flow: print metadata recorded in a configuration document."""

from __future__ import annotations

from pathlib import Path

from ..documents import ConfigDocument, load_config_document
from ..report import Reporter


def run_info(path: Path, reporter: Reporter) -> ConfigDocument:
    document = load_config_document(path, require_directories=False)
    reporter.info_summary(path, document)
    return document


__all__ = ["run_info"]
