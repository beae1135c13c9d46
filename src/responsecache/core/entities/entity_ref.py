"""Entity reference value object."""

from dataclasses import dataclass


@dataclass(frozen=True)
class EntityRef:
    """Identifies one domain entity that appeared in a result.

    Two references with the same type name and id are equal, so a set
    of references collapses duplicates.
    """

    typename: str
    id: str

    @property
    def key(self) -> str:
        """Return the tag used to index cache entries by this entity."""
        return f"{self.typename}:{self.id}"

    def to_dict(self) -> dict[str, str]:
        """Return the JSON shape reported in response metadata."""
        return {"typename": self.typename, "id": self.id}

    def __str__(self) -> str:
        return self.key
