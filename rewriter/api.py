"""Composable API functions for the spec-block rewriting pipeline.

Each function is one pipeline stage (parse, rewrite, print) or a
composition of them, callable programmatically by a host driver.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Mapping, Optional

from .applier import RewritePass, RewriteResult
from .config import DEFAULT_CONFIG, RewriteConfig
from .frontend import get_frontend
from .parser import Parser, TreeSitterParserFactory
from .printer import print_tree
from .tree import SourceNode
from . import constants

logger = logging.getLogger(__name__)


def parse_source(source: str, language: str = constants.DEFAULT_LANGUAGE) -> SourceNode:
    """Parse source text into a ``SourceNode`` tree.

    Args:
        source: The source code text.
        language: Source language name (only "ruby" has a frontend).

    Returns:
        The ``PROGRAM`` node of the converted tree.
    """
    frontend = get_frontend(language)
    tree = Parser(TreeSitterParserFactory()).parse(source, language)
    return frontend.lower(tree, source.encode("utf-8"))


def rewrite_source(
    source: str,
    language: str = constants.DEFAULT_LANGUAGE,
    config: RewriteConfig = DEFAULT_CONFIG,
) -> RewriteResult:
    """Parse source text and run the rewrite pass over it.

    Args:
        source: The source code text.
        language: Source language name.
        config: Keyword registry and naming policy.

    Returns:
        The rewritten tree with its diagnostics and counters.
    """
    logger.info("Rewriting source (%s, %d bytes)", language, len(source))
    root = parse_source(source, language)
    return RewritePass(config).rewrite(root)


def dump_rewritten(
    source: str,
    language: str = constants.DEFAULT_LANGUAGE,
    config: RewriteConfig = DEFAULT_CONFIG,
) -> str:
    """Rewrite source text and render the result back to source text.

    Args:
        source: The source code text.
        language: Source language name.
        config: Keyword registry and naming policy.

    Returns:
        The rewritten program, one statement per line.
    """
    return print_tree(rewrite_source(source, language, config).tree)


def rewrite_sources(
    sources: Mapping[str, str],
    language: str = constants.DEFAULT_LANGUAGE,
    config: RewriteConfig = DEFAULT_CONFIG,
    max_workers: Optional[int] = None,
) -> dict[str, RewriteResult]:
    """Rewrite many independent sources concurrently.

    Every source gets its own parser, frontend and ``RewritePass``, so no
    state is shared between workers.

    Args:
        sources: Mapping of a caller-chosen key (e.g. a path) to source text.
        language: Source language name.
        config: Keyword registry and naming policy.
        max_workers: Thread pool size; ``None`` lets the executor decide.

    Returns:
        A dict with the same keys, mapping to each source's result.
    """
    logger.info("Rewriting %d sources (%s)", len(sources), language)
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = {
            key: pool.submit(rewrite_source, text, language, config)
            for key, text in sources.items()
        }
        return {key: future.result() for key, future in futures.items()}
