from src.domain.person.entities.person import (
    KEY_ATTRIBUTES,
    NAME_ATTRIBUTE,
    PARTITION_KEY,
    SORT_KEY,
    Person,
    PersonImageError,
    changed_attributes,
)

__all__ = [
    "KEY_ATTRIBUTES",
    "NAME_ATTRIBUTE",
    "PARTITION_KEY",
    "SORT_KEY",
    "Person",
    "PersonImageError",
    "changed_attributes",
]
