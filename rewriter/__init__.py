"""Spec-block rewriter: desugars describe/it blocks into classes and methods."""

from .applier import RewritePass, RewriteResult, rewrite_tree  # noqa: F401
from .config import RewriteConfig  # noqa: F401
from .api import (  # noqa: F401
    parse_source,
    rewrite_source,
    dump_rewritten,
    rewrite_sources,
)
