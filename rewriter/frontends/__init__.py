"""Tree-sitter frontends producing ``SourceNode`` trees."""

from __future__ import annotations

import importlib

from ._base import BaseFrontend

# Lazy imports to avoid loading all frontends at startup
_FRONTEND_CLASSES: dict[str, str] = {
    "ruby": "ruby.RubyFrontend",
}


def get_deterministic_frontend(language: str) -> BaseFrontend:
    """Instantiate the frontend for *language*.

    Raises ``ValueError`` if *language* has no registered frontend.
    """
    spec = _FRONTEND_CLASSES.get(language)
    if spec is None:
        raise ValueError(f"Unsupported language for rewriting: {language}")
    module_name, class_name = spec.split(".")
    mod = importlib.import_module(f".{module_name}", package=__package__)
    cls = getattr(mod, class_name)
    return cls()


__all__ = [
    "BaseFrontend",
    "get_deterministic_frontend",
]
