import json
import logging
from typing import Any, List

from study_frontend.misc.schemas import ExplanationSection, Faq

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Section"


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    items = []
    for item in value:
        if isinstance(item, dict) and "term" in item:
            # glossary entries sometimes arrive as {term, definition}
            term = _text(item.get("term"))
            definition = _text(item.get("definition") or item.get("meaning"))
            items.append(f"{term}: {definition}" if definition else term)
        elif item is not None:
            text = _text(item)
            if text:
                items.append(text)
    return items


def _faqs(value: Any) -> List[Faq]:
    if not isinstance(value, list):
        return []
    faqs = []
    for item in value:
        if not isinstance(item, dict):
            continue
        q = _text(item.get("q", item.get("question")))
        a = _text(item.get("a", item.get("answer")))
        if q or a:
            faqs.append(Faq(q=q, a=a))
    return faqs


class ExplanationSectionRenderer:
    """
    Maps the /explain section array to ExplanationSection records.

    Never raises. A non-array explanation becomes one section holding the
    raw text, and a malformed element becomes a section with empty fields,
    so a partly broken explanation still shows what it can.
    """

    def render(self, sections: Any) -> List[ExplanationSection]:
        if not isinstance(sections, list):
            logger.debug(f"Explanation is a {type(sections).__name__}, showing it as raw text")
            return [ExplanationSection(title=DEFAULT_TITLE, paragraph=_text(sections))]

        return [self.render_section(element) for element in sections]

    def render_section(self, element: Any) -> ExplanationSection:
        if isinstance(element, str):
            return ExplanationSection(paragraph=element)
        if not isinstance(element, dict):
            return ExplanationSection()

        title = _text(element.get("title")).strip() or DEFAULT_TITLE
        paragraph = element.get("paragraph")
        return ExplanationSection(
            title=title,
            paragraph=_text(paragraph) if paragraph is not None else None,
            bullets=_string_list(element.get("bullets")),
            examples=_string_list(element.get("examples")),
            terms=_string_list(element.get("terms")),
            faqs=_faqs(element.get("faqs")),
        )


def render_explanation(sections: Any) -> List[ExplanationSection]:
    return ExplanationSectionRenderer().render(sections)
