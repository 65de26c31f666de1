"""Rewrite configuration (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass

from . import constants


@dataclass(frozen=True)
class KeywordShape:
    """A recognized call name and the argument shape it must have.

    ``arity`` counts positional arguments; the first one is the label. A
    block is always required.
    """

    keyword: str
    arity: int = 1


@dataclass(frozen=True)
class HookShape:
    """A label-less block call (``before do ... end``) turned into a fixed method."""

    keyword: str
    method_name: str


@dataclass(frozen=True)
class RewriteConfig:
    """Groups the immutable keyword registry and naming policy of one pass."""

    describe: KeywordShape = KeywordShape(constants.DESCRIBE_KEYWORD)
    it: KeywordShape = KeywordShape(constants.IT_KEYWORD)
    hooks: tuple[HookShape, ...] = ()
    let: KeywordShape | None = None
    class_name_prefix: str = constants.CLASS_NAME_PREFIX
    method_name_prefix: str = constants.METHOD_NAME_PREFIX

    @classmethod
    def minitest(cls) -> RewriteConfig:
        """The full Minitest::Spec vocabulary: describe/it plus before/after/let."""
        return cls(
            hooks=(
                HookShape(constants.BEFORE_KEYWORD, constants.SETUP_METHOD_NAME),
                HookShape(constants.AFTER_KEYWORD, constants.TEARDOWN_METHOD_NAME),
            ),
            let=KeywordShape(constants.LET_KEYWORD),
        )

    def keywords(self) -> frozenset[str]:
        names = {self.describe.keyword, self.it.keyword}
        names.update(hook.keyword for hook in self.hooks)
        if self.let is not None:
            names.add(self.let.keyword)
        return frozenset(names)

    def hook_for(self, keyword: str) -> HookShape | None:
        for hook in self.hooks:
            if hook.keyword == keyword:
                return hook
        return None


DEFAULT_CONFIG = RewriteConfig()
