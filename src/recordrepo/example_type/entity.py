from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class ExampleType:
    """A node in a tree of example types; ``parent_id`` is None for roots."""

    id: Optional[str] = None
    parent_id: Optional[str] = None
    description: Optional[str] = None

    @property
    def is_root(self) -> bool:
        return self.parent_id is None
