"""MathML to LaTeX conversion for the math rules."""

from __future__ import annotations

import logging
import re
from typing import Callable

from bs4 import BeautifulSoup, PageElement, Tag

from .dom import attr, element_children, is_element, tag_name, text_content

logger = logging.getLogger(__name__)

GREEK_LETTERS = {
    "α": r"\alpha",
    "β": r"\beta",
    "γ": r"\gamma",
    "δ": r"\delta",
    "ε": r"\varepsilon",
    "ϵ": r"\epsilon",
    "ζ": r"\zeta",
    "η": r"\eta",
    "θ": r"\theta",
    "ϑ": r"\vartheta",
    "ι": r"\iota",
    "κ": r"\kappa",
    "λ": r"\lambda",
    "μ": r"\mu",
    "ν": r"\nu",
    "ξ": r"\xi",
    "π": r"\pi",
    "ϖ": r"\varpi",
    "ρ": r"\rho",
    "ϱ": r"\varrho",
    "σ": r"\sigma",
    "ς": r"\varsigma",
    "τ": r"\tau",
    "υ": r"\upsilon",
    "φ": r"\varphi",
    "ϕ": r"\phi",
    "χ": r"\chi",
    "ψ": r"\psi",
    "ω": r"\omega",
    "Γ": r"\Gamma",
    "Δ": r"\Delta",
    "Θ": r"\Theta",
    "Λ": r"\Lambda",
    "Ξ": r"\Xi",
    "Π": r"\Pi",
    "Σ": r"\Sigma",
    "Υ": r"\Upsilon",
    "Φ": r"\Phi",
    "Ψ": r"\Psi",
    "Ω": r"\Omega",
}

OPERATORS = {
    "−": "-",
    "∗": "*",
    "±": r"\pm",
    "∓": r"\mp",
    "×": r"\times",
    "÷": r"\div",
    "⋅": r"\cdot",
    "·": r"\cdot",
    "∘": r"\circ",
    "≤": r"\leq",
    "≥": r"\geq",
    "≠": r"\neq",
    "≈": r"\approx",
    "≡": r"\equiv",
    "∼": r"\sim",
    "≃": r"\simeq",
    "∝": r"\propto",
    "≪": r"\ll",
    "≫": r"\gg",
    "→": r"\rightarrow",
    "←": r"\leftarrow",
    "↔": r"\leftrightarrow",
    "⇒": r"\Rightarrow",
    "⇐": r"\Leftarrow",
    "⇔": r"\Leftrightarrow",
    "↦": r"\mapsto",
    "∈": r"\in",
    "∉": r"\notin",
    "∋": r"\ni",
    "⊂": r"\subset",
    "⊃": r"\supset",
    "⊆": r"\subseteq",
    "⊇": r"\supseteq",
    "∪": r"\cup",
    "∩": r"\cap",
    "∖": r"\setminus",
    "∅": r"\emptyset",
    "∀": r"\forall",
    "∃": r"\exists",
    "¬": r"\neg",
    "∧": r"\wedge",
    "∨": r"\vee",
    "⊕": r"\oplus",
    "⊗": r"\otimes",
    "∞": r"\infty",
    "∂": r"\partial",
    "∇": r"\nabla",
    "∑": r"\sum",
    "∏": r"\prod",
    "∫": r"\int",
    "∬": r"\iint",
    "∮": r"\oint",
    "√": r"\sqrt",
    "…": r"\ldots",
    "⋯": r"\cdots",
    "⋮": r"\vdots",
    "⋱": r"\ddots",
    "′": "'",
    "″": "''",
    "{": r"\{",
    "}": r"\}",
    "‖": r"\|",
    "⟨": r"\langle",
    "⟩": r"\rangle",
    "⌊": r"\lfloor",
    "⌋": r"\rfloor",
    "⌈": r"\lceil",
    "⌉": r"\rceil",
    "ℏ": r"\hbar",
    "ℓ": r"\ell",
    "ℝ": r"\mathbb{R}",
    "ℕ": r"\mathbb{N}",
    "ℤ": r"\mathbb{Z}",
    "ℚ": r"\mathbb{Q}",
    "ℂ": r"\mathbb{C}",
    # Invisible operators (function application, times, separator, plus)
    "⁡": "",
    "⁢": "",
    "⁣": "",
    "⁤": "",
}

# Operators written with surrounding spaces
SPACED_OPERATORS = frozenset(
    {
        "+",
        "-",
        "=",
        "<",
        ">",
        r"\pm",
        r"\mp",
        r"\times",
        r"\div",
        r"\cdot",
        r"\leq",
        r"\geq",
        r"\neq",
        r"\approx",
        r"\equiv",
        r"\sim",
        r"\simeq",
        r"\propto",
        r"\rightarrow",
        r"\leftarrow",
        r"\leftrightarrow",
        r"\Rightarrow",
        r"\Leftarrow",
        r"\Leftrightarrow",
        r"\mapsto",
        r"\in",
        r"\notin",
        r"\subset",
        r"\supset",
        r"\subseteq",
        r"\supseteq",
        r"\cup",
        r"\cap",
    }
)

# Operators taking limits as sub/superscripts under munder/mover
LARGE_OPERATORS = frozenset({r"\sum", r"\prod", r"\int", r"\iint", r"\oint", r"\lim", r"\max", r"\min", r"\sup", r"\inf"})

FUNCTION_NAMES = frozenset(
    {
        "sin",
        "cos",
        "tan",
        "cot",
        "sec",
        "csc",
        "arcsin",
        "arccos",
        "arctan",
        "sinh",
        "cosh",
        "tanh",
        "log",
        "ln",
        "lg",
        "exp",
        "lim",
        "max",
        "min",
        "sup",
        "inf",
        "det",
        "dim",
        "gcd",
        "deg",
        "arg",
        "ker",
        "hom",
        "Pr",
    }
)

ACCENTS = {
    "^": r"\hat",
    "ˆ": r"\hat",
    "̂": r"\hat",
    "¯": r"\overline",
    "‾": r"\overline",
    "_": r"\overline",
    "→": r"\vec",
    "⃗": r"\vec",
    "~": r"\tilde",
    "˜": r"\tilde",
    "˙": r"\dot",
    "¨": r"\ddot",
    "⏞": r"\overbrace",
}

UNDER_ACCENTS = {
    "_": r"\underline",
    "‾": r"\underline",
    "¯": r"\underline",
    "⏟": r"\underbrace",
}

FENCES = {"{": r"\{", "}": r"\}", "⟨": r"\langle", "⟩": r"\rangle", "‖": r"\|"}

_LATEX_SPECIALS = re.compile(r"([%#&$])")
_COMMAND_END = re.compile(r"\\[A-Za-z]+$")
_SINGLE_TOKEN = re.compile(r"^(?:[A-Za-z0-9.']|\\[A-Za-z]+|\\[{}|])$")
_SPACES = re.compile(r" {2,}")


class MathMLConverter:
    """
    Converts a MathML ``<math>`` tree into LaTeX source.

    Covers presentation MathML (tokens, rows, fractions, roots, scripts,
    under/over constructs, tables and fences). Unknown elements render their
    children, so conversion degrades instead of failing.

    Example:
        converter = MathMLConverter()
        latex = converter.convert(soup.find("math"))
    """

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[Tag], str]] = {
            "mi": self._identifier,
            "mn": self._number,
            "mo": self._operator,
            "mtext": self._text,
            "ms": self._string_literal,
            "mspace": lambda node: " ",
            "mfrac": self._fraction,
            "msqrt": lambda node: f"\\sqrt{{{self._row(node)}}}",
            "mroot": self._root,
            "msup": self._superscript,
            "msub": self._subscript,
            "msubsup": self._subsuperscript,
            "mover": self._over,
            "munder": self._under,
            "munderover": self._underover,
            "mtable": self._table,
            "mtr": self._table_row,
            "mlabeledtr": self._table_row,
            "mfenced": self._fenced,
            "mphantom": lambda node: f"\\phantom{{{self._row(node)}}}",
            "menclose": self._row,
            "semantics": self._semantics,
            "annotation": lambda node: "",
            "annotation-xml": lambda node: "",
            "none": lambda node: "",
            "mprescripts": lambda node: "",
            "mmultiscripts": self._multiscripts,
        }

    def convert(self, math: Tag | str) -> str:
        """
        Convert a ``<math>`` element (or its markup) to LaTeX.

        Args:
            math: The math element, or MathML source text

        Returns:
            LaTeX source without surrounding delimiters
        """
        if isinstance(math, str):
            soup = BeautifulSoup(math, "html.parser")
            found = soup.find("math")
            math = found if isinstance(found, Tag) else soup
        return self._clean(self._row(math))

    def _convert(self, node: PageElement) -> str:
        if not is_element(node):
            return _escape(" ".join(text_content(node).split()))
        handler = self._handlers.get(tag_name(node), self._row)
        return handler(node)  # type: ignore[arg-type]

    def _clean(self, latex: str) -> str:
        return _SPACES.sub(" ", latex).strip()

    def _row(self, node: Tag) -> str:
        return self._join([self._convert(child) for child in node.children])

    def _join(self, parts: list[str]) -> str:
        result = ""
        for part in parts:
            if not part:
                continue
            # "\alpha" followed by a letter needs a separating space
            if _COMMAND_END.search(result) and part[0].isalpha():
                result += " "
            result += part
        return self._clean(result)

    def _args(self, node: Tag) -> list[str]:
        return [self._clean(self._convert(child)) for child in element_children(node)]

    def _group(self, latex: str) -> str:
        return latex if _SINGLE_TOKEN.match(latex) else f"{{{latex}}}"

    def _identifier(self, node: Tag) -> str:
        text = text_content(node).strip()
        if len(text) > 1:
            if text in FUNCTION_NAMES:
                return f"\\{text}"
            return f"\\mathrm{{{_escape(text)}}}"
        if text in GREEK_LETTERS:
            return GREEK_LETTERS[text]
        if text in OPERATORS:
            return OPERATORS[text]
        if attr(node, "mathvariant") == "normal" and text.isalpha():
            return f"\\mathrm{{{text}}}"
        return _escape(text)

    def _number(self, node: Tag) -> str:
        return _escape(text_content(node).strip())

    def _operator(self, node: Tag) -> str:
        text = text_content(node).strip()
        if text in FUNCTION_NAMES:
            return f"\\{text}"
        symbol = OPERATORS.get(text, GREEK_LETTERS.get(text, _escape(text)))
        if symbol in SPACED_OPERATORS:
            return f" {symbol} "
        return symbol

    def _text(self, node: Tag) -> str:
        text = text_content(node)
        if not text.strip():
            return " "
        return f"\\text{{{_escape(text)}}}"

    def _string_literal(self, node: Tag) -> str:
        return f'\\text{{"{_escape(text_content(node))}"}}'

    def _fraction(self, node: Tag) -> str:
        args = self._args(node)
        if len(args) != 2:
            return self._join(args)
        numerator, denominator = args
        if attr(node, "linethickness") in ("0", "0px", "0em"):
            return f"\\binom{{{numerator}}}{{{denominator}}}"
        return f"\\frac{{{numerator}}}{{{denominator}}}"

    def _root(self, node: Tag) -> str:
        args = self._args(node)
        if len(args) != 2:
            return f"\\sqrt{{{self._join(args)}}}"
        base, index = args
        return f"\\sqrt[{index}]{{{base}}}"

    def _superscript(self, node: Tag) -> str:
        args = self._args(node)
        if len(args) != 2:
            return self._join(args)
        base, sup = args
        return f"{self._group(base)}^{{{sup}}}"

    def _subscript(self, node: Tag) -> str:
        args = self._args(node)
        if len(args) != 2:
            return self._join(args)
        base, sub = args
        return f"{self._group(base)}_{{{sub}}}"

    def _subsuperscript(self, node: Tag) -> str:
        args = self._args(node)
        if len(args) != 3:
            return self._join(args)
        base, sub, sup = args
        return f"{self._group(base)}_{{{sub}}}^{{{sup}}}"

    def _over(self, node: Tag) -> str:
        args = self._args(node)
        if len(args) != 2:
            return self._join(args)
        base, over = args
        over_text = text_content(element_children(node)[1]).strip()
        if base in LARGE_OPERATORS:
            return f"{base}^{{{over}}}"
        if over_text in ACCENTS:
            return f"{ACCENTS[over_text]}{{{base}}}"
        return f"\\overset{{{over}}}{{{base}}}"

    def _under(self, node: Tag) -> str:
        args = self._args(node)
        if len(args) != 2:
            return self._join(args)
        base, under = args
        under_text = text_content(element_children(node)[1]).strip()
        if base in LARGE_OPERATORS:
            return f"{base}_{{{under}}}"
        if under_text in UNDER_ACCENTS:
            return f"{UNDER_ACCENTS[under_text]}{{{base}}}"
        return f"\\underset{{{under}}}{{{base}}}"

    def _underover(self, node: Tag) -> str:
        args = self._args(node)
        if len(args) != 3:
            return self._join(args)
        base, under, over = args
        if base in LARGE_OPERATORS:
            return f"{base}_{{{under}}}^{{{over}}}"
        return f"\\overset{{{over}}}{{\\underset{{{under}}}{{{base}}}}}"

    def _table(self, node: Tag) -> str:
        rows = [self._convert(row) for row in element_children(node)]
        return "\\begin{matrix}" + " \\\\ ".join(rows) + "\\end{matrix}"

    def _table_row(self, node: Tag) -> str:
        cells = element_children(node)
        if tag_name(node) == "mlabeledtr":
            cells = cells[1:]
        return " & ".join(self._clean(self._row(cell)) for cell in cells)

    def _fenced(self, node: Tag) -> str:
        open_fence = attr(node, "open", "(")
        close_fence = attr(node, "close", ")")
        separators = attr(node, "separators", ",").replace(" ", "")
        args = self._args(node)
        body = ""
        for index, arg in enumerate(args):
            if index > 0 and separators:
                body += separators[min(index - 1, len(separators) - 1)] + " "
            body += arg
        return f"{FENCES.get(open_fence, open_fence)}{body}{FENCES.get(close_fence, close_fence)}"

    def _semantics(self, node: Tag) -> str:
        children = element_children(node)
        if not children:
            return ""
        return self._convert(children[0])

    def _multiscripts(self, node: Tag) -> str:
        children = element_children(node)
        if not children:
            return ""
        result = self._group(self._clean(self._convert(children[0])))
        scripts = children[1:]
        prescripts = ""
        for index in range(0, len(scripts) - 1, 2):
            if tag_name(scripts[index]) == "mprescripts":
                break
            sub, sup = self._clean(self._convert(scripts[index])), self._clean(self._convert(scripts[index + 1]))
            if sub:
                result += f"_{{{sub}}}"
            if sup:
                result += f"^{{{sup}}}"
        marker = next((i for i, child in enumerate(scripts) if tag_name(child) == "mprescripts"), None)
        if marker is not None:
            pre = scripts[marker + 1 :]
            for index in range(0, len(pre) - 1, 2):
                sub, sup = self._clean(self._convert(pre[index])), self._clean(self._convert(pre[index + 1]))
                prescripts += (f"_{{{sub}}}" if sub else "") + (f"^{{{sup}}}" if sup else "")
            if prescripts:
                result = "{}" + prescripts + result
        return result


def _escape(text: str) -> str:
    return _LATEX_SPECIALS.sub(r"\\\1", text)


_CONVERTER = MathMLConverter()


def mathml_to_latex(math: Tag | str) -> str:
    """Convert MathML to LaTeX with the shared (stateless) converter."""
    latex = _CONVERTER.convert(math)
    logger.debug(f"Converted MathML to LaTeX: {latex}")
    return latex
