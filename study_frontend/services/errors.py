import json
from typing import Optional

from study_frontend.misc.schemas import (
    ErrorInfo,
    ErrorKind,
    JsonBody,
    ParsedBody,
    TextBody,
)


class StudyAPIError(Exception):
    """
    Raised by the endpoint wrappers when a call fails. Carries the
    classified ErrorInfo; str() is the user-facing message.
    """

    def __init__(self, info: ErrorInfo):
        super().__init__(info.message)
        self.info = info

    @property
    def kind(self) -> ErrorKind:
        return self.info.kind

    @property
    def status(self) -> Optional[int]:
        return self.info.status


class ErrorClassifier:
    """
    Derives one human-readable ErrorInfo from whatever the backend sent.

    Message precedence: plain text body, JSON `message`, JSON `error`,
    the compact JSON itself, then "Error <status>". Some endpoints answer
    with {message}, some with {error}, some with bare text.
    """

    def classify(self, body: ParsedBody, status: int) -> ErrorInfo:
        return ErrorInfo(
            kind=ErrorKind.HTTP_STATUS,
            status=status,
            message=self.message_for(body, status),
        )

    def message_for(self, body: ParsedBody, status: int) -> str:
        if isinstance(body, TextBody) and body.text.strip():
            return body.text

        if isinstance(body, JsonBody):
            value = body.value
            if isinstance(value, dict):
                for field in ("message", "error"):
                    candidate = value.get(field)
                    if isinstance(candidate, str) and candidate:
                        return candidate
            if isinstance(value, str) and value.strip():
                return value
            if value and not isinstance(value, str):
                return json.dumps(value, separators=(",", ":"), ensure_ascii=False)

        return f"Error {status}"

    def network(self, exc: Exception) -> ErrorInfo:
        return ErrorInfo(kind=ErrorKind.NETWORK, message=f"Network error: {exc}")

    def malformed(self, detail: str) -> ErrorInfo:
        return ErrorInfo(kind=ErrorKind.MALFORMED_BODY, message=detail)


def classify(body: ParsedBody, status: int) -> ErrorInfo:
    return ErrorClassifier().classify(body, status)
