"""
Base Domain Classes

- Entity: identified by its id, equal when ids are equal
- ValueObject: immutable, equal when all attributes are equal
"""

from abc import ABC
from dataclasses import dataclass, field
from uuid import UUID, uuid4


@dataclass
class Entity(ABC):
    """Base class for objects with identity; the id is generated when omitted."""
    id: UUID = field(default_factory=uuid4, kw_only=True)

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)


@dataclass(frozen=True)
class ValueObject(ABC):
    """Base class for frozen dataclasses compared field by field."""
