"""
Markdown-lite decoding for summaries and notes.

Model output uses a small subset of markdown: `#`/`##`/`###` headings,
`**bold**` spans, `- ` bullets and blank lines between paragraphs. The
text is split into lines and pushed through an ordered list of rules.
Each rule only rewrites plain Text it has not claimed yet, so a rule never
re-matches what an earlier one produced (a heading containing `**` stays
a heading with literal asterisks).

The result is a flat list of blocks. Every block except Break records the
index of the content line it came from; blank lines are not counted, so
collapsing runs of blank lines does not renumber anything.
"""

import re
from typing import List, Optional

from study_frontend.misc.schemas import Block, Bold, Break, Heading, ListItem, Text
from study_frontend.misc.utils import strip_ansi


class BlankLine:
    """Placeholder for a blank source line until BreakRule runs."""

    def __repr__(self):
        return "BlankLine()"


class Rule:
    """
    A single rewrite step. `match` decides whether a plain Text token is
    claimed, `transform` turns it into the replacement blocks.
    """

    def match(self, token: Text, starts_line: bool) -> bool:
        raise NotImplementedError

    def transform(self, token: Text) -> List:
        raise NotImplementedError

    def apply(self, tokens: List) -> List:
        out = []
        previous = None
        for token in tokens:
            starts_line = (
                not isinstance(previous, (Heading, Bold, ListItem, Text))
                or previous.line != getattr(token, "line", None)
            )
            if isinstance(token, Text) and self.match(token, starts_line):
                out.extend(self.transform(token))
            else:
                out.append(token)
            previous = token
        return out


class HeadingRule(Rule):
    def __init__(self, level: int):
        self.level = level
        self.prefix = "#" * level

    def match(self, token, starts_line):
        return starts_line and token.text.lstrip().startswith(self.prefix)

    def transform(self, token):
        rest = token.text.lstrip()[len(self.prefix):].lstrip("#").lstrip()
        return [Heading(level=self.level, text=rest, line=token.line)]


class BoldRule(Rule):
    pattern = re.compile(r"\*\*(.+?)\*\*")

    def match(self, token, starts_line):
        return bool(self.pattern.search(token.text))

    def transform(self, token):
        pieces = []
        cursor = 0
        for m in self.pattern.finditer(token.text):
            if m.start() > cursor:
                pieces.append(Text(text=token.text[cursor:m.start()], line=token.line))
            pieces.append(Bold(text=m.group(1), line=token.line))
            cursor = m.end()
        if cursor < len(token.text):
            pieces.append(Text(text=token.text[cursor:], line=token.line))
        return pieces


class ListItemRule(Rule):
    marker = "- "

    def match(self, token, starts_line):
        return starts_line and token.text.lstrip().startswith(self.marker)

    def transform(self, token):
        rest = token.text.lstrip()[len(self.marker):].lstrip()
        return [ListItem(text=rest, line=token.line)]


class BreakRule(Rule):
    """
    Turns runs of blank lines between content into a single Break.
    Blank lines before the first or after the last content line vanish.
    """

    def apply(self, tokens):
        out = []
        pending = False
        for token in tokens:
            if isinstance(token, BlankLine):
                pending = bool(out)
                continue
            if pending:
                out.append(Break())
                pending = False
            out.append(token)
        return out


DEFAULT_RULES = (
    HeadingRule(3),
    HeadingRule(2),
    HeadingRule(1),
    BoldRule(),
    ListItemRule(),
    BreakRule(),
)


class MarkdownLiteRenderer:
    def __init__(self, rules: Optional[List[Rule]] = None):
        self.rules = list(rules) if rules is not None else list(DEFAULT_RULES)

    def tokenize(self, text: str) -> List:
        tokens = []
        line_no = 0
        for raw in strip_ansi(text or "").splitlines():
            if not raw.strip():
                tokens.append(BlankLine())
                continue
            tokens.append(Text(text=raw.rstrip(), line=line_no))
            line_no += 1
        return tokens

    def render(self, text: str) -> List[Block]:
        tokens = self.tokenize(text)
        for rule in self.rules:
            tokens = rule.apply(tokens)
        # a custom rule set may leave placeholders behind
        return [t for t in tokens if not isinstance(t, BlankLine)]


def render_markdown(text: str) -> List[Block]:
    return MarkdownLiteRenderer().render(text)
