"""
Gemini client setup with lazy initialization.
"""

from google import genai

from core.config import GEMINI_API_KEY

_genai_client: genai.Client | None = None


def get_genai_client() -> genai.Client:
    """Get or create the Gemini client (lazy initialization)."""
    global _genai_client
    if _genai_client is None:
        _genai_client = genai.Client(api_key=GEMINI_API_KEY)
    return _genai_client
