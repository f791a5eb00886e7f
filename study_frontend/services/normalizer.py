import json
import logging

import requests

from study_frontend.misc.schemas import EmptyBody, JsonBody, ParsedBody, TextBody

logger = logging.getLogger(__name__)

# Reading a streamed body can fail in any of these ways once the
# connection has already produced a status line.
_UNREADABLE = (requests.exceptions.RequestException, OSError, RuntimeError)


class ResponseNormalizer:
    """
    Turns a raw HTTP response into exactly one ParsedBody.

    The declared content type is advisory only: backends in this domain
    mislabel JSON as text and vice versa, so a JSON parse is attempted
    whatever the header says before falling back to the raw text.
    """

    def normalize(self, response: requests.Response) -> ParsedBody:
        try:
            raw = response.content
            text = response.text
        except _UNREADABLE as e:
            logger.warning(f"Response body could not be read: {e}")
            return EmptyBody()

        if raw is None:
            return EmptyBody()

        content_type = (response.headers.get("content-type") or "").lower()

        declared_json = "json" in content_type

        # Declared JSON and sniffed JSON share one parse attempt; a failed
        # parse of the same bytes cannot succeed the second time.
        parsed = self._try_json(raw)
        if parsed is not None:
            if not declared_json:
                logger.debug(f"JSON body served as '{content_type or 'no content type'}'")
            return parsed

        if declared_json:
            logger.debug("Body declared as JSON did not parse, keeping it as text")
        return TextBody(text=text)

    @staticmethod
    def _try_json(raw: bytes):
        if not raw:
            return None
        try:
            return JsonBody(value=json.loads(raw))
        except ValueError:
            return None


def normalize(response: requests.Response) -> ParsedBody:
    return ResponseNormalizer().normalize(response)
