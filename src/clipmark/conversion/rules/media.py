"""Figures and embedded YouTube / X (Twitter) players."""

import re
from typing import Optional

from bs4 import Tag

from ..context import ConversionContext
from ..dom import attr, is_tag, text_content
from ..engine import Rule
from .base import block

PRIORITY = 400

YOUTUBE_PATTERN = re.compile(
    r"(?:https?://)?(?:www\.)?(?:youtube\.com|youtu\.be)/(?:embed/|watch\?v=)?([a-zA-Z0-9_-]+)"
)
TWEET_PATTERN = re.compile(r"(?:twitter\.com|x\.com)/.*?(?:status|statuses)/(\d+)")
_EMBED_HOSTS = re.compile(r"youtube\.com|youtu\.be|twitter\.com|x\.com")


def _figure(content: str, node: Tag, ctx: ConversionContext) -> Optional[str]:
    img = node.find("img")
    if img is None:
        return None
    markdown = f"![{attr(img, 'alt')}]({attr(img, 'src')})"
    caption = text_content(node.find("figcaption")).strip()
    if caption:
        markdown += f"\n> {caption}"
    return block(markdown)


def _is_embed(node: Tag) -> bool:
    return is_tag(node, "iframe") and bool(_EMBED_HOSTS.search(attr(node, "src")))


def _embed(content: str, node: Tag, ctx: ConversionContext) -> Optional[str]:
    src = attr(node, "src")
    youtube = YOUTUBE_PATTERN.search(src)
    if youtube:
        return f"![](https://www.youtube.com/watch?v={youtube.group(1)})"
    tweet = TWEET_PATTERN.search(src)
    if tweet:
        return f"![](https://x.com/i/status/{tweet.group(1)})"
    return None


def build_rules() -> list[Rule]:
    return [
        Rule("figure", lambda node: is_tag(node, "figure"), _figure, PRIORITY),
        Rule("embedToMarkdown", _is_embed, _embed, PRIORITY),
    ]
