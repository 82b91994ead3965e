"""
Mapping fixture relation references to the ids Strapi assigned.

Fixture articles point at categories and authors with {"id": N}. When the
fixture gives its records their own "id", N must be one of those ids.
Otherwise N is the record's 1-based position in the fixture list.
"""
from typing import Any, Dict, Optional

from .exceptions import FixtureError
from .models import FixtureRecord


class IdMap:
    """Fixture references -> created ids for one content type"""

    def __init__(self, model: str):
        self.model = model
        self._by_fixture_id: Dict[Any, int] = {}
        self._by_position: Dict[int, int] = {}

    def __len__(self):
        return len(self._by_position)

    @property
    def uses_fixture_ids(self) -> bool:
        return bool(self._by_fixture_id)

    def add(self, position: int, record: FixtureRecord, created: Dict[str, Any]):
        created_id = created["id"]
        self._by_position[position] = created_id
        fixture_id = getattr(record, "id", None)
        if fixture_id is not None:
            self._by_fixture_id[fixture_id] = created_id

    def resolve(self, ref: Any) -> Optional[int]:
        """
        Raises:
            FixtureError: If the reference points at a record that was never created
        """
        if ref is None:
            return None
        key = ref.get("id") if isinstance(ref, dict) else ref
        if key is None:
            return None
        if self.uses_fixture_ids:
            if key in self._by_fixture_id:
                return self._by_fixture_id[key]
        elif isinstance(key, int) and key in self._by_position:
            return self._by_position[key]
        raise FixtureError(f"Unknown {self.model} reference: {ref!r}")
