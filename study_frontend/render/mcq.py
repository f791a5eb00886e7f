"""
Quiz decoding for /make-mcq.

The backend answers either with a JSON array of {question, options} or,
when the model output could not be structured, with a plain transcript:

    1. What is 2+2?
    A) 3
    B) 4
    Correct answer: B

Both forms end up as a list of MCQRecord.
"""

import logging
import re
from enum import Enum
from typing import Any, List, Optional

from study_frontend.misc.schemas import MCQRecord

logger = logging.getLogger(__name__)

MAX_OPTIONS = 4

QUESTION_LINE = re.compile(r"^\d+\.")
OPTION_LINE = re.compile(r"^([A-D])\)\s*", re.IGNORECASE)
ANSWER_LINE = re.compile(r"^correct answer:", re.IGNORECASE)


class ParserState(Enum):
    NO_QUESTION = "no_question"
    IN_QUESTION = "in_question"
    IN_OPTIONS = "in_options"
    AFTER_ANSWER = "after_answer"


class _OpenRecord:
    def __init__(self, question_text: str):
        self.question_text = question_text
        self.options: List[str] = []
        self.correct_answer_line: Optional[str] = None

    def freeze(self) -> MCQRecord:
        return MCQRecord(
            question_text=self.question_text,
            options=list(self.options),
            correct_answer_line=self.correct_answer_line,
        )


class MCQTranscriptParser:
    """
    Single forward pass over trimmed, non-empty lines.

    NO_QUESTION --number--> IN_QUESTION --option--> IN_OPTIONS
    IN_OPTIONS  --option--> IN_OPTIONS
    IN_QUESTION/IN_OPTIONS --answer--> AFTER_ANSWER
    any state   --number--> IN_QUESTION (the previous record is closed)

    Lines that fit no transition are skipped; generated transcripts carry
    stray commentary and blank padding.
    """

    def parse(self, transcript: str) -> List[MCQRecord]:
        records: List[MCQRecord] = []
        current: Optional[_OpenRecord] = None
        state = ParserState.NO_QUESTION

        for raw_line in (transcript or "").splitlines():
            line = raw_line.strip()
            if not line:
                continue

            if QUESTION_LINE.match(line):
                if current is not None:
                    records.append(current.freeze())
                current = _OpenRecord(line)
                state = ParserState.IN_QUESTION
                continue

            option = OPTION_LINE.match(line)
            if option:
                if state in (ParserState.IN_QUESTION, ParserState.IN_OPTIONS):
                    if len(current.options) < MAX_OPTIONS:
                        current.options.append(line[option.end():].strip())
                    else:
                        logger.debug(f"Dropping option beyond {MAX_OPTIONS}: {line!r}")
                    state = ParserState.IN_OPTIONS
                else:
                    logger.debug(f"Ignoring option outside an open question ({state.value}): {line!r}")
                continue

            if ANSWER_LINE.match(line):
                if state in (ParserState.IN_QUESTION, ParserState.IN_OPTIONS):
                    current.correct_answer_line = line
                    state = ParserState.AFTER_ANSWER
                else:
                    logger.debug(f"Ignoring answer line in state {state.value}: {line!r}")
                continue

        # end of input closes whatever is still open
        if current is not None:
            records.append(current.freeze())

        return records


def parse_transcript(transcript: str) -> List[MCQRecord]:
    return MCQTranscriptParser().parse(transcript)


def _answer_line_from(item: dict) -> Optional[str]:
    for key in ("answer", "correct_answer"):
        value = item.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def normalize_mcq_payload(payload: Any) -> List[MCQRecord]:
    """
    Accepts either MCQ shape /make-mcq is known to return and gives back
    the canonical list. Unrecognized payloads produce an empty list.
    """
    if isinstance(payload, dict):
        if isinstance(payload.get("mcqs"), str):
            return parse_transcript(payload["mcqs"])
        if isinstance(payload.get("mcqs"), list):
            payload = payload["mcqs"]

    if isinstance(payload, str):
        return parse_transcript(payload)

    if not isinstance(payload, list):
        logger.debug(f"Unrecognized MCQ payload of type {type(payload).__name__}")
        return []

    records = []
    for item in payload:
        if not isinstance(item, dict):
            continue
        question = item.get("question")
        if not question:
            continue
        options = item.get("options") or []
        if not isinstance(options, list):
            options = []
        records.append(
            MCQRecord(
                question_text=str(question),
                options=[str(o) for o in options[:MAX_OPTIONS]],
                correct_answer_line=_answer_line_from(item),
            )
        )
    return records
