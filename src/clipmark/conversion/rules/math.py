"""
Math rules for MathJax, KaTeX and generic MathML / MediaWiki markup.

The block-versus-inline decisions are heuristics matched to markup seen in
the wild (MediaWiki in particular).
"""

import re

from bs4 import Tag

from ..context import ConversionContext
from ..dom import (
    attr,
    closest,
    has_class,
    is_tag,
    is_text,
    previous_element_sibling,
    text_content,
)
from ..engine import Rule
from ..mathml import mathml_to_latex

PRIORITY = 700

TEX_ANNOTATION = 'annotation[encoding="application/x-tex"]'

MEDIAWIKI_MATH_CLASSES = (
    "mwe-math-element",
    "mwe-math-fallback-image-inline",
    "mwe-math-fallback-image-display",
)

_NO_SPACE_NEEDED = re.compile(r"[\s$]")


def block_math(latex: str) -> str:
    return f"\n$$\n{latex}\n$$\n"


def inline_math(latex: str) -> str:
    return f"${latex}$"


def _is_mathjax(node: Tag) -> bool:
    return is_tag(node, "mjx-container")


def _mathjax(content: str, node: Tag, ctx: ConversionContext) -> str:
    assistive = node.find("mjx-assistive-mml")
    if assistive is None:
        return content
    math = assistive.find("math")
    if math is None:
        return content

    latex = mathml_to_latex(math)
    if attr(math, "display") == "block":
        return block_math(latex)
    return inline_math(latex)


def _is_katex(node: Tag) -> bool:
    return has_class(node, "math", "katex")


def _katex(content: str, node: Tag, ctx: ConversionContext) -> str:
    latex = attr(node, "data-latex").strip()
    if not latex:
        latex = text_content(node.select_one(TEX_ANNOTATION)).strip()
    if not latex:
        latex = text_content(node).strip()

    math = node.find("math")
    if math is not None and attr(math, "display") == "block":
        return block_math(latex)
    return inline_math(latex)


def _is_math(node: Tag) -> bool:
    return is_tag(node, "math") or has_class(node, *MEDIAWIKI_MATH_CLASSES)


def extract_latex(node: Tag) -> str:
    """LaTeX source for a math element, taken from the first available source."""
    if is_tag(node, "math"):
        latex = attr(node, "data-latex") or attr(node, "alttext")
        if latex:
            return latex.strip()

    nested = node.select_one("math[alttext]")
    if nested is not None and attr(nested, "alttext"):
        return attr(nested, "alttext").strip()

    annotation = node.select_one(TEX_ANNOTATION)
    if annotation is not None and text_content(annotation).strip():
        return text_content(annotation).strip()

    math = node if is_tag(node, "math") else node.find("math")
    if math is not None:
        return mathml_to_latex(math)

    image = node if is_tag(node, "img") else node.find("img")
    return attr(image, "alt")


def is_display_math(node: Tag) -> bool:
    if closest(node, lambda n: is_tag(n, "table")) is not None:
        return False
    if attr(node, "display") == "block":
        return True
    if has_class(node, "mwe-math-fallback-image-display"):
        return True
    parent = node.parent
    return has_class(parent, "mwe-math-element") and is_tag(previous_element_sibling(parent), "p")  # type: ignore[arg-type]


def _math(content: str, node: Tag, ctx: ConversionContext) -> str:
    latex = extract_latex(node).strip()
    if is_display_math(node):
        return block_math(latex)

    before = node.previous_sibling
    after = node.next_sibling
    before_text = text_content(before)
    after_text = text_content(after)

    at_start = before is None or (is_text(before) and before_text.strip() == "")
    at_end = after is None or (is_text(after) and after_text.strip() == "")

    prev_char = before_text[-1:]
    next_char = after_text[:1]
    left = " " if not at_start and prev_char and not _NO_SPACE_NEEDED.match(prev_char) else ""
    right = " " if not at_end and next_char and not _NO_SPACE_NEEDED.match(next_char) else ""
    return f"{left}{inline_math(latex)}{right}"


def build_rules() -> list[Rule]:
    return [
        Rule("MathJax", _is_mathjax, _mathjax, PRIORITY + 20),
        Rule("katex", _is_katex, _katex, PRIORITY + 10),
        Rule("math", _is_math, _math, PRIORITY),
    ]
