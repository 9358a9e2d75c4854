"""Persona data models.

The persona describes who the gift is for and selects a prompt template.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Relation(Enum):
    """Relationship between the requester and the gift recipient."""
    COUPLE = "couple"
    PARENT = "parent"
    FRIEND = "friend"
    OTHER = "other"

    @classmethod
    def parse(cls, value: "str | Relation | None") -> "Relation":
        """Map a free-form string to a Relation, defaulting to OTHER."""
        if isinstance(value, cls):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.OTHER


class Sex(Enum):
    """Sex of the gift recipient."""
    MALE = "male"
    FEMALE = "female"
    UNSPECIFIED = "unspecified"

    @classmethod
    def parse(cls, value: "str | Sex | None") -> "Sex":
        """Map a free-form string to a Sex, defaulting to UNSPECIFIED."""
        if isinstance(value, cls):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.UNSPECIFIED


@dataclass(frozen=True)
class PersonaDescriptor:
    """The (relation, sex, theme) triple that selects a prompt template."""
    relation: Relation = Relation.OTHER
    sex: Sex = Sex.UNSPECIFIED
    theme: str = ""  # occasion, e.g. "birthday", "valentine", "housewarming"

    @classmethod
    def create(cls, relation: str | None, sex: str | None, theme: str | None) -> "PersonaDescriptor":
        """Build a descriptor from raw request values."""
        return cls(
            relation=Relation.parse(relation),
            sex=Sex.parse(sex),
            theme=(theme or "").strip(),
        )

    @property
    def normalized_theme(self) -> str:
        return self.theme.lower()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "relation": self.relation.value,
            "sex": self.sex.value,
            "theme": self.theme,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PersonaDescriptor":
        """Create from dictionary."""
        return cls.create(data.get("relation"), data.get("sex"), data.get("theme"))
