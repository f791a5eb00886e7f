import logging
from typing import Any, List, Optional

from study_frontend.misc.schemas import (
    BinaryForm,
    Block,
    ExplanationSection,
    FormFile,
    JsonBody,
    LoginResult,
    MCQRecord,
    NoteEntry,
    ParsedBody,
    ProfileUpdate,
    TextBody,
    UserProfile,
)
from study_frontend.misc.utils import truncate
from study_frontend.render.explanation import render_explanation
from study_frontend.render.markdown_lite import render_markdown
from study_frontend.render.mcq import normalize_mcq_payload
from study_frontend.services.errors import ErrorClassifier, StudyAPIError
from study_frontend.services.transport import TransportClient

logger = logging.getLogger(__name__)

NOTE_PREVIEW_CHARS = 200


def _json_object(body: ParsedBody, endpoint: str) -> dict:
    """The JSON object an endpoint must answer with, or a MALFORMED_BODY error."""
    if isinstance(body, JsonBody) and isinstance(body.value, dict):
        return body.value
    raise StudyAPIError(
        ErrorClassifier().malformed(f"Unexpected response from {endpoint}")
    )


def _optional_text(value: Any) -> Optional[str]:
    """Backend scalars as text; numbers stored for mobile or name come back as str."""
    if value is None or value == "":
        return None
    return value if isinstance(value, str) else str(value)


def _field(body: ParsedBody, endpoint: str, name: str) -> Any:
    """
    A single named field of the success body. A plain text body is
    accepted as the field value itself, some deployments answer that way.
    """
    if isinstance(body, TextBody) and body.text.strip():
        return body.text
    return _json_object(body, endpoint).get(name)


class StudyBotAPI:
    """
    Calls the study-assistant backend. One method per endpoint.

    Every method takes the bearer token explicitly; nothing is read from
    session state. Failures raise StudyAPIError whose str() is ready to
    show to the user.
    """

    def __init__(self, base_url: Optional[str] = None, transport: Optional[TransportClient] = None):
        self.transport = transport or TransportClient(base_url=base_url)

    # ----------------Auth----------------------

    def register(self, name: str, email: str, password: str, mobile: Optional[str] = None) -> str:
        """
        Creates an account. Returns the backend's message.
        """
        payload = {"name": name, "email": email, "password": password}
        if mobile:
            payload["mobile"] = mobile

        body = self.transport.post("/auth/register", payload).unwrap()
        if isinstance(body, JsonBody) and isinstance(body.value, dict):
            return _optional_text(body.value.get("message")) or "Account created ✓"
        return "Account created ✓"

    def login(self, email: str, password: str) -> LoginResult:
        """
        Exchanges credentials for a bearer token.
        """
        body = self.transport.post("/auth/login", {"email": email, "password": password}).unwrap()
        data = _json_object(body, "/auth/login")

        token = data.get("access_token") or data.get("token")
        if not token:
            raise StudyAPIError(ErrorClassifier().malformed("Token missing"))

        user = data.get("user") if isinstance(data.get("user"), dict) else {}
        return LoginResult(token=str(token), user_name=_optional_text(user.get("name")) or "User")

    def get_profile(self, token: str) -> UserProfile:
        data = _json_object(self.transport.get("/auth/me", token).unwrap(), "/auth/me")
        return UserProfile(
            name=_optional_text(data.get("name")) or "",
            email=_optional_text(data.get("email")) or "",
            mobile=_optional_text(data.get("mobile")) or "",
        )

    def update_profile(self, token: str, name: str, mobile: str) -> ProfileUpdate:
        body = self.transport.put("/auth/me", {"name": name, "mobile": mobile}, token).unwrap()
        if not (isinstance(body, JsonBody) and isinstance(body.value, dict)):
            return ProfileUpdate()

        user = body.value.get("user") if isinstance(body.value.get("user"), dict) else {}
        return ProfileUpdate(
            user_name=_optional_text(user.get("name")),
            message=_optional_text(body.value.get("message")),
        )

    def delete_account(self, token: str) -> str:
        body = self.transport.delete("/auth/me", token).unwrap()
        if isinstance(body, JsonBody) and isinstance(body.value, dict):
            return _optional_text(body.value.get("message")) or "Account deleted"
        return "Account deleted"

    # ----------------Study tools----------------------

    def summarize(self, token: Optional[str], filename: str, content: bytes, content_type: str = "application/pdf") -> List[Block]:
        """
        Uploads a document and returns its summary as markdown-lite blocks.
        """
        form = BinaryForm(files=[FormFile(filename=filename, content=content, content_type=content_type)])
        body = self.transport.post("/summarize", form, token).unwrap()
        summary = _field(body, "/summarize", "summary")
        return render_markdown(summary if isinstance(summary, str) else "")

    def explain(self, token: Optional[str], topic: str) -> List[ExplanationSection]:
        body = self.transport.post("/explain", {"topic": topic}, token).unwrap()
        return render_explanation(_field(body, "/explain", "explanation"))

    def make_notes(self, token: Optional[str], text: str) -> List[Block]:
        """
        Generates study notes. The backend answers with one string or a
        list of lines; both are rendered the same way.
        """
        body = self.transport.post("/make-notes", {"text": text}, token).unwrap()
        notes = _field(body, "/make-notes", "notes")
        if isinstance(notes, list):
            notes = "\n".join(str(n) for n in notes if n is not None)
        return render_markdown(notes if isinstance(notes, str) else "")

    def make_mcq(self, token: Optional[str], text: str, count: Optional[int] = None) -> List[MCQRecord]:
        payload = {"text": text}
        if count is not None:
            payload["count"] = count

        body = self.transport.post("/make-mcq", payload, token).unwrap()
        if isinstance(body, TextBody):
            return normalize_mcq_payload(body.text)
        if isinstance(body, JsonBody):
            return normalize_mcq_payload(body.value)
        return []

    def ask(self, token: Optional[str], question: str, text: Optional[str] = None) -> str:
        """
        Asks a question, optionally grounded on a passage of text.
        """
        payload = {"question": question}
        if text:
            payload["text"] = text

        body = self.transport.post("/qna", payload, token).unwrap()
        answer = _field(body, "/qna", "answer")
        return answer if isinstance(answer, str) else "No answer provided."

    def list_notes(self, token: str) -> List[NoteEntry]:
        body = self.transport.get("/notes", token).unwrap()
        if not (isinstance(body, JsonBody) and isinstance(body.value, list)):
            logger.debug(f"/notes answered with {body.kind}, treating as no notes")
            return []

        entries = []
        for note in body.value:
            if not isinstance(note, dict):
                continue
            title = note.get("title") or note.get("pdf_name") or "Note"
            text = note.get("content") or note.get("summary") or ""
            entries.append(NoteEntry(title=str(title), preview=truncate(str(text), NOTE_PREVIEW_CHARS)))
        return entries
