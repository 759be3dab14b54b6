"""Topic lookup, property parsing and keyword search.

Responsibilities:
- Fetch a topic record through a session and parse it into a ``Topic``
- Classify each property value as a nested ``Topic`` or an ``Attribute``
- Drop excluded property prefixes and count properties per domain
- Run keyword searches and return topics keyed by descending score

A topic is either *unsynced* (built from an id only) or *synced* (built from a
fetched record). The record is parsed once, at construction.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING, Any, Optional, Union

from pydantic import ValidationError

from freebase_api.models import Attribute, Image, SearchHit

if TYPE_CHECKING:
    from freebase_api.session import Session

logger = logging.getLogger(__name__)

#: Scope sent with every Topic API lookup.
TOPIC_FILTER = "commons"

NAME_PROPERTY = "/type/object/name"
TYPE_PROPERTY = "/type/object/type"
DESCRIPTION_PROPERTY = "/common/topic/description"
ARTICLE_PROPERTY = "/common/topic/article"
DOCUMENT_TEXT_PROPERTY = "/common/document/text"

#: Valuetypes whose values reference another topic.
TOPIC_VALUETYPES = frozenset(["object", "compound"])

PropertyValue = Union["Topic", Attribute]
Exclusion = Union[str, list[str], tuple[str, ...], None]


def _exclusion_prefixes(exclude: Exclusion) -> tuple[str, ...]:
    """Normalise an exclusion option (prefix or list of prefixes) to a tuple."""
    if not exclude:
        return ()
    if isinstance(exclude, str):
        return (exclude,)
    return tuple(exclude)


def property_domain(property_id: str) -> str:
    """Return the domain of a property id: its first segment after the leading slash.

    Examples:
        >>> property_domain("/common/topic/official_website")
        'common'
    """
    return property_id.lstrip("/").split("/", 1)[0]


class Topic:
    """A Freebase topic with its parsed properties.

    Use ``Topic.get`` to fetch and parse a topic; ``Topic(id)`` alone builds
    an unsynced topic that only knows its id.
    """

    def __init__(
        self,
        id: str,
        data: Optional[dict[str, Any]] = None,
        session: Optional[Session] = None,
        exclude: Exclusion = None,
    ) -> None:
        self._session = session
        self._excluded = _exclusion_prefixes(exclude)
        self._synced = data is not None
        self._data: dict[str, Any] = {"id": id, **(data or {})}
        self._image: Optional[Image] = None
        self._properties: dict[str, list[PropertyValue]] = self._build()

    # ── Construction ─────────────────────────────────────────────────────

    @classmethod
    def get(
        cls,
        id: str,
        session: Session,
        lang: Optional[str] = None,
        exclude: Exclusion = None,
    ) -> Topic:
        """Fetch *id* through *session* and return a synced topic.

        Args:
            id: Topic id or key path (``"/en/github"``, ``"/m/04g0kcw"``).
            session: Collaborator performing the Topic API call.
            lang: Language code; omitted from the call when ``None``.
            exclude: Property id prefix (or list of prefixes) to drop.

        Raises:
            ValueError: If the id is blank.
            ServiceError: When the session reports a failure.
        """
        id = id.strip()
        if not id:
            raise ValueError("Topic id must not be empty.")

        options: dict[str, Any] = {"filter": TOPIC_FILTER}
        if lang is not None:
            options["lang"] = lang

        logger.info("Topic lookup id=%r lang=%s exclude=%s", id, lang, exclude)
        record = session.topic(id, **options)
        return cls(id, data=record or {}, session=session, exclude=exclude)

    def _build(self) -> dict[str, list[PropertyValue]]:
        raw = self._data.get("property")
        if not isinstance(raw, dict):
            return {}

        logger.debug("Building topic %s: %d properties", self.id, len(raw))
        properties: dict[str, list[PropertyValue]] = {}
        for key, prop in raw.items():
            if key.startswith(self._excluded):
                continue
            if not isinstance(prop, dict):
                properties[key] = []
                continue
            values: list[PropertyValue] = []
            for value in prop.get("values") or []:
                if not isinstance(value, dict):
                    continue
                try:
                    values.append(self._parse_value(value, prop.get("valuetype")))
                except ValidationError as exc:
                    logger.warning("Skipping malformed value of %s on %s: %s", key, self.id, exc)
            properties[key] = values
        return properties

    def _parse_value(self, value: dict[str, Any], valuetype: Optional[str]) -> PropertyValue:
        if valuetype in TOPIC_VALUETYPES or isinstance(value.get("property"), dict):
            return Topic(value.get("id", ""), data=value, session=self._session)
        return Attribute.from_record(value, valuetype)

    # ── Accessors ────────────────────────────────────────────────────────

    @property
    def id(self) -> str:
        return self._data["id"]

    @property
    def synced(self) -> bool:
        return self._synced

    @property
    def lang(self) -> Optional[str]:
        return self._data.get("lang")

    @property
    def text(self) -> Optional[str]:
        return self._data.get("text")

    @property
    def name(self) -> Optional[str]:
        """First ``/type/object/name`` value, falling back to ``text``."""
        names = self.property_values(NAME_PROPERTY)
        if names and isinstance(names[0], Attribute) and names[0].value is not None:
            return str(names[0].value)
        return self.text

    @property
    def types(self) -> list[str]:
        return [t.id for t in self.property_values(TYPE_PROPERTY) if isinstance(t, Topic)]

    @property
    def description(self) -> Optional[str]:
        """Topic description, ``""`` when a synced topic has none.

        Uses ``/common/topic/description`` when present, otherwise the
        document text of the first ``/common/topic/article``.
        """
        if not self._synced:
            return None

        for value in self.property_values(DESCRIPTION_PROPERTY):
            if isinstance(value, Attribute) and value.value:
                return str(value.value)

        articles = self.property_values(ARTICLE_PROPERTY)
        if articles and isinstance(articles[0], Topic):
            texts = articles[0].property_values(DOCUMENT_TEXT_PROPERTY)
            if texts and isinstance(texts[0], Attribute) and texts[0].value:
                return str(texts[0].value)
        return ""

    @property
    def properties(self) -> dict[str, list[PropertyValue]]:
        return self._properties

    def property_values(self, property_id: str) -> list[PropertyValue]:
        """Return the values of one property (empty list when absent)."""
        return self._properties.get(property_id, [])

    @property
    def properties_domains(self) -> dict[str, int]:
        """Count of kept properties per domain, e.g. ``{"common": 17, "internet": 1}``."""
        return dict(Counter(property_domain(key) for key in self._properties))

    @property
    def image(self) -> Optional[Image]:
        """The topic image, fetched once through the session.

        An ``Image`` with ``data=None`` means the service has no image for the
        topic. Topics built without a session have no image at all.
        """
        if self._image is None and self._session is not None:
            self._image = Image.get(self.id, self._session)
        return self._image

    # ── Serialisation ────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation, nested topics included."""
        return {
            "id": self.id,
            "lang": self.lang,
            "text": self.text,
            "name": self.name,
            "types": self.types,
            "description": self.description,
            "properties": {
                key: [
                    value.to_dict() if isinstance(value, Topic) else value.model_dump()
                    for value in values
                ]
                for key, values in self._properties.items()
            },
            "properties_domains": self.properties_domains,
        }

    def __repr__(self) -> str:
        return f"<Topic id={self.id!r} name={self.name!r}>"


# ── Search ─────────────────────────────────────────────────────────────────────


def search(query: str, session: Session, **options: Any) -> dict[float, Topic]:
    """Search topics by keyword.

    Args:
        query: Free-text search query.
        session: Collaborator performing the Search API call.
        **options: Forwarded untouched to ``session.search`` (``limit``, ``lang``, …).

    Returns:
        Dict mapping relevance score → ``Topic``, highest score first. When two
        hits share a score the first one received is kept.

    Raises:
        ValueError: If the query is blank.
    """
    query = query.strip()
    if not query:
        raise ValueError("Search query must not be empty.")

    logger.info("Search query=%r options=%s", query, options)
    records = session.search(query, **options) or []
    valid: list[SearchHit] = []
    for record in records:
        try:
            valid.append(SearchHit.model_validate(record))
        except ValidationError as exc:
            logger.warning("Skipping malformed search hit %r: %s", record, exc)
    hits = sorted(valid, key=lambda hit: hit.score, reverse=True)

    results: dict[float, Topic] = {}
    for hit in hits:
        if hit.score in results:
            logger.debug("Duplicate score %s for %s, keeping %s", hit.score, hit.mid, results[hit.score].id)
            continue
        results[hit.score] = Topic(hit.mid, data=hit.to_topic_record(), session=session)

    logger.info("Search complete: %d topics found", len(results))
    return results
