from study_frontend.services.api import StudyBotAPI
from study_frontend.services.errors import ErrorClassifier, StudyAPIError, classify
from study_frontend.services.normalizer import ResponseNormalizer, normalize
from study_frontend.services.transport import TransportClient, TransportResult

__all__ = [
    "StudyBotAPI",
    "ErrorClassifier",
    "StudyAPIError",
    "classify",
    "ResponseNormalizer",
    "normalize",
    "TransportClient",
    "TransportResult",
]
