"""Rule dispatch: pick the best rule for a node and apply it."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

from bs4 import Tag

from .dom import is_block, tag_name

if TYPE_CHECKING:
    from .context import ConversionContext

logger = logging.getLogger(__name__)

# Type aliases for rule callables
RuleFilter = Callable[[Tag], bool]
RuleReplacement = Callable[[str, Tag, "ConversionContext"], Optional[str]]

# Rendered as their own HTML when no rule claims them
KEEP_TAGS = ("iframe", "video", "audio", "sup", "sub", "svg", "math")

# Dropped with all their content before any rule runs
REMOVE_TAGS = ("style", "script", "button")


@dataclass(frozen=True)
class Rule:
    """
    A single conversion rule.

    Attributes:
        name: Identifier used in diagnostics
        filter: Predicate deciding whether the rule applies to a node
        replacement: Receives the node's converted children, the node and the
            conversion context; returns the node's Markdown, or None to let
            later rules (and finally the default rule) handle the node
        priority: Higher priorities are tried first
    """

    name: str
    filter: RuleFilter
    replacement: RuleReplacement
    priority: int = 0


class RuleEngine:
    """
    Ordered, immutable collection of conversion rules.

    Rules are tried by descending priority; rules sharing a priority keep
    their registration order. The engine holds no per-conversion state and
    can be shared between threads.

    Example:
        engine = RuleEngine([Rule("mark", lambda n: n.name == "mark", wrap, priority=10)])
        markdown = engine.apply(node, children_markdown, ctx)
    """

    def __init__(
        self,
        rules: Iterable[Rule] = (),
        keep: Iterable[str] = KEEP_TAGS,
        remove: Iterable[str] = REMOVE_TAGS,
    ):
        # sorted() is stable, so registration order breaks priority ties
        self._rules = tuple(sorted(rules, key=lambda rule: -rule.priority))
        self._keep = frozenset(keep)
        self._remove = frozenset(remove)

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    def add(self, *rules: Rule) -> RuleEngine:
        """Return a new engine with extra rules registered."""
        return RuleEngine((*self._rules, *rules), keep=self._keep, remove=self._remove)

    def removes(self, node: Tag) -> bool:
        """True if the node is dropped outright, children included."""
        return tag_name(node) in self._remove

    def find_rule(self, node: Tag) -> Optional[Rule]:
        """First rule whose filter accepts the node (filter errors count as no match)."""
        for rule in self._rules:
            try:
                if rule.filter(node):
                    return rule
            except Exception as e:
                logger.debug(f"Filter of rule '{rule.name}' failed on <{tag_name(node)}>: {e}")
        return None

    def apply(self, node: Tag, content: str, ctx: ConversionContext) -> str:
        """
        Convert one element given its already-converted children.

        Args:
            node: Element being converted
            content: Concatenated Markdown of the node's children
            ctx: Conversion context of the running transpile call

        Returns:
            Markdown for the node
        """
        if self.removes(node):
            return ""

        for rule in self._rules:
            try:
                if not rule.filter(node):
                    continue
                result = rule.replacement(content, node, ctx)
            except Exception as e:
                logger.debug(f"Rule '{rule.name}' failed on <{tag_name(node)}>, using default: {e}")
                return self.default(node, content)
            if result is not None:
                return result

        return self.default(node, content)

    def default(self, node: Tag, content: str) -> str:
        """Fallback conversion used when no rule produced output."""
        name = tag_name(node)
        if name in self._remove:
            return ""
        if name in self._keep:
            html = str(node)
            return f"\n\n{html}\n\n" if is_block(node) else html
        if is_block(node):
            return f"\n\n{content.strip()}\n\n"
        return content
