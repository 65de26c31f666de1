"""Tree-Sitter Parsing Layer — source text to concrete syntax tree."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from tree_sitter import Tree

from . import constants

logger = logging.getLogger(__name__)


class ParserFactory(ABC):
    """Abstract factory for obtaining a language parser."""

    @abstractmethod
    def get_parser(self, language: str): ...


class TreeSitterParserFactory(ParserFactory):
    """Delegates to tree-sitter-language-pack; every call yields a fresh parser."""

    def get_parser(self, language: str):
        import tree_sitter_language_pack as tslp

        logger.debug("Loading tree-sitter parser for %s", language)
        return tslp.get_parser(language)


class Parser:
    """Parses source text into a tree-sitter ``Tree``."""

    def __init__(self, parser_factory: ParserFactory):
        self._factory = parser_factory

    def parse(self, source: str, language: str = constants.DEFAULT_LANGUAGE) -> Tree:
        encoded = source.encode("utf-8")
        tree = self._factory.get_parser(language).parse(encoded)
        if tree.root_node.has_error:
            logger.info(
                "Parse of %d bytes (%s) contains error nodes", len(encoded), language
            )
        return tree
