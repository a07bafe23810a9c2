"""Shared identifiers for structured logging."""
from __future__ import annotations

SERVICE_NAME = "modern_networking"
