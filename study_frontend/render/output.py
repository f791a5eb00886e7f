from typing import Iterator, List, Optional, Tuple

from study_frontend.misc.schemas import Block, Bold, Break, Heading, ListItem
from study_frontend.misc.utils import escape_html


def group_lines(blocks: List[Block]) -> Iterator[Tuple[Optional[Block], List[Block]]]:
    """
    Regroups the flat block list into source lines.

    Yields (lead, inline) per line, where lead is the Heading or ListItem
    that opened the line (None for a plain line) and inline holds the
    Text/Bold runs that followed it. A Break is yielded as (Break, []).
    """
    lead = None
    inline: List[Block] = []
    line = None
    open_line = False

    for block in blocks:
        if isinstance(block, Break):
            if open_line:
                yield lead, inline
            yield block, []
            lead, inline, line, open_line = None, [], None, False
            continue

        if open_line and block.line != line:
            yield lead, inline
            lead, inline, open_line = None, [], False

        if not open_line:
            line = block.line
            open_line = True
            if isinstance(block, (Heading, ListItem)):
                lead = block
                continue
        inline.append(block)

    if open_line:
        yield lead, inline


def _inline_text(inline: List[Block]) -> str:
    return "".join(f"**{b.text}**" if isinstance(b, Bold) else b.text for b in inline)


def _inline_html(inline: List[Block]) -> str:
    return "".join(
        f"<b>{escape_html(b.text)}</b>" if isinstance(b, Bold) else escape_html(b.text)
        for b in inline
    )


def blocks_to_text(blocks: List[Block]) -> str:
    """Writes blocks back out in markdown-lite form."""
    lines = []
    for lead, inline in group_lines(blocks):
        if isinstance(lead, Break):
            lines.append("")
        elif isinstance(lead, Heading):
            lines.append(f"{'#' * lead.level} {lead.text}{_inline_text(inline)}")
        elif isinstance(lead, ListItem):
            lines.append(f"- {lead.text}{_inline_text(inline)}")
        else:
            lines.append(_inline_text(inline))
    return "\n".join(lines)


def blocks_to_html(blocks: List[Block]) -> str:
    parts = []
    for lead, inline in group_lines(blocks):
        if isinstance(lead, Break):
            parts.append("<br><br>")
        elif isinstance(lead, Heading):
            body = escape_html(lead.text) + _inline_html(inline)
            parts.append(f"<h{lead.level}>{body}</h{lead.level}>")
        elif isinstance(lead, ListItem):
            parts.append(f"<li>{escape_html(lead.text)}{_inline_html(inline)}</li>")
        else:
            parts.append(_inline_html(inline))
    return "\n".join(parts)
