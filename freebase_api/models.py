"""
Pydantic value objects shared across the Freebase client.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from freebase_api.errors import FreebaseError

if TYPE_CHECKING:
    from freebase_api.session import Session

logger = logging.getLogger(__name__)

#: Default bounds sent with every image request.
DEFAULT_IMAGE_SIZE = 4096


class Attribute(BaseModel):
    """A scalar property value (string, number, uri, datetime, …)."""

    model_config = ConfigDict(frozen=True)

    value: Union[str, int, float, bool, None] = None
    text: Optional[str] = None
    lang: Optional[str] = None
    type: Optional[str] = None
    """The Freebase ``valuetype`` of the owning property."""

    @classmethod
    def from_record(cls, record: dict[str, Any], valuetype: Optional[str] = None) -> Attribute:
        """Wrap one raw property value record."""
        return cls(
            value=record.get("value"),
            text=record.get("text"),
            lang=record.get("lang"),
            type=valuetype,
        )


class Image(BaseModel):
    """Image data attached to a topic.

    ``data`` is ``None`` when the session had no image for the topic; that is a
    normal outcome, not an error.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    data: Optional[bytes] = None
    maxwidth: int = DEFAULT_IMAGE_SIZE
    maxheight: int = DEFAULT_IMAGE_SIZE

    @classmethod
    def get(
        cls,
        id: str,
        session: Session,
        maxwidth: int = DEFAULT_IMAGE_SIZE,
        maxheight: int = DEFAULT_IMAGE_SIZE,
    ) -> Image:
        """Fetch the image for *id* through *session*."""
        data = session.image(id, maxwidth=maxwidth, maxheight=maxheight)
        if data is None:
            logger.info("No image for topic %s", id)
        return cls(id=id, data=data, maxwidth=maxwidth, maxheight=maxheight)

    @property
    def exists(self) -> bool:
        return self.data is not None

    @property
    def size(self) -> int:
        """Byte length of the image, 0 when absent."""
        return len(self.data) if self.data is not None else 0

    def store(self, path: Union[str, Path]) -> Path:
        """Write the image bytes to *path* and return it.

        Raises:
            FreebaseError: If the topic has no image data.
        """
        if self.data is None:
            raise FreebaseError(f"Topic {self.id} has no image to store.")
        target = Path(path)
        target.write_bytes(self.data)
        logger.info("Stored image for %s at %s (%d bytes)", self.id, target, self.size)
        return target


class NotableType(BaseModel):
    """The notable type reported with a search hit."""

    id: str
    name: Optional[str] = None


class SearchHit(BaseModel):
    """One record of a search response."""

    mid: str = Field(validation_alias=AliasChoices("mid", "id"))
    name: Optional[str] = None
    score: float = 0.0
    lang: Optional[str] = None
    notable: Optional[NotableType] = None
    properties: Optional[dict[str, Any]] = Field(
        default=None, validation_alias=AliasChoices("property", "properties"),
    )

    def to_topic_record(self) -> dict[str, Any]:
        """Shape the hit like a Topic API record carrying its partial properties."""
        if self.properties is not None:
            properties = self.properties
        else:
            properties = {
                "/type/object/name": {
                    "valuetype": "string",
                    "values": [{"lang": self.lang, "text": self.name, "value": self.name}],
                },
            }
            if self.notable is not None:
                properties["/common/topic/notable_for"] = {
                    "valuetype": "object",
                    "values": [
                        {"id": self.notable.id, "text": self.notable.name, "lang": self.lang},
                    ],
                }
        return {"id": self.mid, "lang": self.lang, "text": self.name, "property": properties}
