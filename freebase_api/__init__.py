"""
freebase_api package.

Modules
───────
models   — Pydantic value objects (Attribute, Image, SearchHit)
topic    — Topic lookup, property parsing, domain counts and keyword search
session  — Session protocol and the fixture-backed FixtureSession
errors   — FreebaseError / ServiceError
"""

from freebase_api.errors import FreebaseError, ServiceError
from freebase_api.models import Attribute, Image, SearchHit
from freebase_api.session import FixtureSession, Session
from freebase_api.topic import Topic, search

__all__ = [
    "Attribute",
    "FixtureSession",
    "FreebaseError",
    "Image",
    "SearchHit",
    "ServiceError",
    "Session",
    "Topic",
    "search",
]
