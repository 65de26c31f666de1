"""Named constants — eliminates magic strings across the codebase."""

from __future__ import annotations

DESCRIBE_KEYWORD = "describe"
IT_KEYWORD = "it"

BEFORE_KEYWORD = "before"
AFTER_KEYWORD = "after"
LET_KEYWORD = "let"

SETUP_METHOD_NAME = "setup"
TEARDOWN_METHOD_NAME = "teardown"

CLASS_NAME_PREFIX = "Spec_"
METHOD_NAME_PREFIX = "test_"

ANONYMOUS_NAME_PREFIX = "anonymous_"
COLLISION_SUFFIX_START = 2

SELF_RECEIVER = "self"

DEFAULT_LANGUAGE = "ruby"

INDENT = "  "
