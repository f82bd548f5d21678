"""Built-in conversion rules, one module per category."""

from typing import Optional

from ...models.config import MarkdownConfig
from ..engine import RuleEngine
from . import blocks, commonmark, footnotes, inline, lists, math, media, removals, tables


def build_rule_engine(config: Optional[MarkdownConfig] = None) -> RuleEngine:
    """
    Engine holding every built-in rule.

    Args:
        config: Markdown options (list bullet marker); defaults used if omitted

    Returns:
        A RuleEngine that can be shared between conversions
    """
    config = config or MarkdownConfig()
    return RuleEngine(
        [
            *removals.build_rules(),
            *footnotes.build_rules(),
            *math.build_rules(),
            *tables.build_rules(),
            *lists.build_rules(config),
            *media.build_rules(),
            *blocks.build_rules(),
            *inline.build_rules(),
            *commonmark.build_rules(),
        ]
    )


__all__ = ["build_rule_engine"]
