import re

ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")

_HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}


def strip_ansi(text: str) -> str:
    """
    Removes terminal colour/cursor escape sequences that model output
    sometimes carries over from a console.
    """
    return ANSI_ESCAPE.sub("", text)


def escape_html(text) -> str:
    return re.sub(r"[&<>\"']", lambda m: _HTML_ESCAPES[m.group(0)], str(text or ""))


def truncate(text: str, limit: int) -> str:
    return text[:limit]
