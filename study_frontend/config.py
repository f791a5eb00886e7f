import logging
import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_BASE_URL = "https://ai-study-backened.onrender.com"

API_BASE_URL = os.getenv("API_BASE_URL", DEFAULT_BASE_URL).rstrip("/")

DEBUG = os.getenv("STUDY_DEBUG", "").strip().lower() in ("1", "true", "yes", "on")

LOG_LEVEL = logging.DEBUG if DEBUG else logging.INFO
