from enum import Enum


class EntityType(str, Enum):
    """Record collections exposed by the shelter REST API."""

    ANIMALS = "animals"
    ADOPTION_INQUIRIES = "adoption_inquiries"
    VOLUNTEERS = "volunteers"

    @property
    def collection_path(self) -> str:
        return _COLLECTION_PATHS[self]

    @property
    def list_key(self) -> str | None:
        """Envelope key wrapping list responses, None for bare lists."""
        return _LIST_KEYS.get(self)

    @property
    def has_record_endpoint(self) -> bool:
        """Whether the API serves single records at ``record_path``."""
        return self in _RECORD_ENDPOINTS

    @property
    def paginated(self) -> bool:
        """Whether list responses are split into ``page``/``limit`` pages."""
        return self in _PAGINATED

    def record_path(self, record_id: str) -> str:
        return f"{self.collection_path}/{record_id}"

    def status_path(self, record_id: str) -> str:
        if self is EntityType.ANIMALS:
            return f"{self.record_path(record_id)}/status"
        return self.record_path(record_id)

    def export_filename(self, iso_date: str) -> str:
        return f"{self.value}_export_{iso_date}.csv"


_COLLECTION_PATHS = {
    EntityType.ANIMALS: "/admin/animals",
    EntityType.ADOPTION_INQUIRIES: "/admin/adoption-inquiries",
    EntityType.VOLUNTEERS: "/volunteers/applications",
}

_LIST_KEYS = {
    EntityType.ADOPTION_INQUIRIES: "inquiries",
    EntityType.VOLUNTEERS: "applications",
}

_RECORD_ENDPOINTS = frozenset({EntityType.ANIMALS, EntityType.ADOPTION_INQUIRIES})

_PAGINATED = frozenset({EntityType.ADOPTION_INQUIRIES})
