"""Library-level constants shared across modules."""
from __future__ import annotations


class HTTP_VERB:
    GET = "GET"
    POST = "POST"


USER_AGENT_HEADER = "User-Agent"
ALLOWED_URL_SCHEMES = ("http", "https")
