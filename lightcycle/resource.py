"""
Resources that can be placed on the ring.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional


class HasId(ABC):
    """Things stored in the ring must advertise a stable identifier string."""

    @property
    @abstractmethod
    def id(self) -> str:
        ...

    def __repr__(self):
        return f"{self.__class__.__name__}(id={self.id!r})"


@dataclass(frozen=True)
class Resource(HasId):
    """A named resource with an optional opaque payload."""
    name: str
    payload: Optional[Any] = None

    @property
    def id(self) -> str:
        return self.name


def resource_id(resource) -> str:
    """
    Extract the identifier of a resource.

    Strings identify themselves; anything else must expose an ``id``
    attribute holding a string.
    """
    if isinstance(resource, str):
        return resource

    ident = getattr(resource, "id", None)
    if not isinstance(ident, str):
        raise TypeError(
            f"{type(resource).__name__} has no string 'id'; resources must implement HasId"
        )
    return ident
