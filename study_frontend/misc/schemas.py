from enum import Enum
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


# ----------------Transport----------------------


class FormFile(FrozenModel):
    """
    One file part of a multipart upload
    """

    field: str = "file"
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


class BinaryForm(FrozenModel):
    """
    A multipart/form-data body. The transport hands it to requests as-is.
    """

    files: List[FormFile]
    fields: dict = Field(default_factory=dict)


class Request(FrozenModel):
    """
    The shape of one outgoing call to the backend
    """

    method: Literal["GET", "POST", "PUT", "DELETE"]
    path: str
    body: Any = None  # JSON value, BinaryForm or None
    token: Optional[str] = None

    @property
    def is_form(self) -> bool:
        return isinstance(self.body, BinaryForm)


class JsonBody(FrozenModel):
    kind: Literal["json"] = "json"
    value: Any = None


class TextBody(FrozenModel):
    kind: Literal["text"] = "text"
    text: str


class EmptyBody(FrozenModel):
    kind: Literal["empty"] = "empty"


ParsedBody = Annotated[
    Union[JsonBody, TextBody, EmptyBody], Field(discriminator="kind")
]


class ErrorKind(str, Enum):
    NETWORK = "network"
    HTTP_STATUS = "http_status"
    MALFORMED_BODY = "malformed_body"


class ErrorInfo(FrozenModel):
    """
    A classified failure. `message` is always fit to show a user,
    `status` is only set for HTTP_STATUS errors.
    """

    kind: ErrorKind
    status: Optional[int] = None
    message: str


# ----------------Study artifacts----------------------


class Faq(FrozenModel):
    q: str
    a: str


class ExplanationSection(FrozenModel):
    """
    One titled block of an explanation from /explain
    """

    title: str = "Section"
    paragraph: Optional[str] = None
    bullets: List[str] = Field(default_factory=list)
    examples: List[str] = Field(default_factory=list)
    terms: List[str] = Field(default_factory=list)
    faqs: List[Faq] = Field(default_factory=list)


class MCQRecord(FrozenModel):
    """
    One quiz question. `correct_answer_line` is kept verbatim
    (e.g. "Correct answer: B"), never reduced to a letter.
    """

    question_text: str
    options: List[str] = Field(default_factory=list, max_length=4)
    correct_answer_line: Optional[str] = None


class NoteEntry(FrozenModel):
    """
    One item of the saved notes history from GET /notes
    """

    title: str
    preview: str


class UserProfile(FrozenModel):
    name: str = ""
    email: str = ""
    mobile: str = ""


class LoginResult(FrozenModel):
    token: str
    user_name: str = "User"


class ProfileUpdate(FrozenModel):
    user_name: Optional[str] = None
    message: Optional[str] = None


# ----------------Markdown-lite blocks----------------------


class Heading(FrozenModel):
    kind: Literal["heading"] = "heading"
    level: int = Field(ge=1, le=3)
    text: str
    line: int = 0


class Bold(FrozenModel):
    kind: Literal["bold"] = "bold"
    text: str
    line: int = 0


class ListItem(FrozenModel):
    kind: Literal["list_item"] = "list_item"
    text: str
    line: int = 0


class Text(FrozenModel):
    kind: Literal["text"] = "text"
    text: str
    line: int = 0


class Break(FrozenModel):
    kind: Literal["break"] = "break"


Block = Annotated[
    Union[Heading, Bold, ListItem, Text, Break], Field(discriminator="kind")
]
