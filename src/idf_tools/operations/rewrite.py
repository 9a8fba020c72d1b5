"""
Config-driven document rewrite.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..config import RewriteConfig
from ..idf30.model import IdfDocument
from .library_ops import dedupe_definitions, part_numbers_from_geometry
from .placement_ops import part_numbers_from_packages, remove_test_points

logger = logging.getLogger(__name__)


def tag_source(doc: IdfDocument, prefix: str) -> None:
    """Prepend ``prefix`` to the header's source, marking the file as rewritten."""
    doc.header.source = f"{prefix}{doc.header.source}"


def apply_rewrite(doc: IdfDocument, config: Optional[RewriteConfig] = None) -> IdfDocument:
    """
    Apply the ``[rewrite]`` settings to a document.

    Steps run in a fixed order: source tag, test point removal, part number
    replacement, definition dedupe. Each step is a no-op when disabled or
    when it does not apply to the file type.

    Args:
        doc: Document to change in place
        config: Rewrite settings (defaults change nothing)

    Returns:
        The same document, for chaining
    """
    config = config or RewriteConfig()

    if config.source_prefix:
        tag_source(doc, config.source_prefix)
    if config.remove_test_points:
        remove_test_points(doc)
    if config.part_numbers_from == "package":
        part_numbers_from_packages(doc)
    elif config.part_numbers_from == "geometry":
        part_numbers_from_geometry(doc)
    if config.dedupe_definitions:
        dedupe_definitions(doc)

    logger.debug("Rewrote %s %r", doc.header.file_type_token, doc.header.source)
    return doc
