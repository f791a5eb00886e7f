from study_frontend.render.explanation import ExplanationSectionRenderer, render_explanation
from study_frontend.render.markdown_lite import MarkdownLiteRenderer, render_markdown
from study_frontend.render.mcq import MCQTranscriptParser, normalize_mcq_payload, parse_transcript
from study_frontend.render.output import blocks_to_html, blocks_to_text

__all__ = [
    "ExplanationSectionRenderer",
    "render_explanation",
    "MarkdownLiteRenderer",
    "render_markdown",
    "MCQTranscriptParser",
    "normalize_mcq_payload",
    "parse_transcript",
    "blocks_to_html",
    "blocks_to_text",
]
