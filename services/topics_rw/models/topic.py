"""
Topic Models
============

The Topic record exchanged over the API and its alternative identifiers.

Version: 0.1.0
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


# Labels every stored topic carries, most generic first
BASELINE_LABELS: tuple[str, ...] = ("Thing", "Concept", "Topic")


class IdentifierScheme(str, Enum):
    """Naming schemes for alternative identifiers."""

    TME = "TME"
    UPP = "uuids"

    @property
    def label(self) -> str:
        """Node label used for identifiers under this scheme."""
        return _SCHEME_LABELS[self]


_SCHEME_LABELS = {
    IdentifierScheme.TME: "TMEIdentifier",
    IdentifierScheme.UPP: "UPPIdentifier",
}


class AlternativeIdentifiers(BaseModel):
    """Foreign identifier values grouped by scheme."""

    model_config = ConfigDict(populate_by_name=True)

    tme: list[str] = Field(default_factory=list, alias="TME")
    uuids: list[str] = Field(default_factory=list)

    @field_validator("tme", "uuids", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        """Accept null in place of an empty list."""
        return [] if v is None else v

    def by_scheme(self) -> list[tuple[IdentifierScheme, list[str]]]:
        """Identifier values paired with their scheme, TME first."""
        return [
            (IdentifierScheme.TME, self.tme),
            (IdentifierScheme.UPP, self.uuids),
        ]


class Topic(BaseModel):
    """A topic being catalogued."""

    model_config = ConfigDict(populate_by_name=True)

    uuid: str = Field(..., min_length=1)
    pref_label: str = Field(default="", alias="prefLabel")
    alternative_identifiers: AlternativeIdentifiers = Field(
        default_factory=AlternativeIdentifiers,
        alias="alternativeIdentifiers",
    )
    types: list[str] = Field(
        default_factory=list,
        description="Labels on the stored node; ignored on write",
    )

    @field_validator("alternative_identifiers", mode="before")
    @classmethod
    def null_identifiers(cls, v: Any) -> Any:
        return AlternativeIdentifiers() if v is None else v

    @field_validator("types", mode="before")
    @classmethod
    def null_types(cls, v: Any) -> Any:
        return [] if v is None else v

    def to_payload(self) -> dict:
        """
        Serialize to the JSON shape used on the wire.

        Empty ``TME`` and ``types`` lists are left out; ``uuids`` is always
        present.
        """
        payload = self.model_dump(by_alias=True)
        if not self.alternative_identifiers.tme:
            del payload["alternativeIdentifiers"]["TME"]
        if not self.types:
            del payload["types"]
        return payload


class TopicDecodeError(ValueError):
    """Raised when a payload cannot be decoded into a Topic."""


def decode_topic(raw: str | bytes) -> Topic:
    """
    Decode a JSON document into a Topic.

    Raises:
        TopicDecodeError: if the document is not valid JSON or does not
            have the shape of a Topic
    """
    try:
        return Topic.model_validate_json(raw)
    except ValidationError as e:
        raise TopicDecodeError(str(e)) from e


def order_types(labels: list[str]) -> list[str]:
    """Baseline labels first in chain order, any others sorted after."""
    baseline = [label for label in BASELINE_LABELS if label in labels]
    extra = sorted(label for label in labels if label not in BASELINE_LABELS)
    return baseline + extra
