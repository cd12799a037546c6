"""Per-entity allow-lists for sorting, filtering, searching and includes.

Every list endpoint declares what clients may touch. Anything outside the
declaration is rejected with a 400 before a query is built, which keeps
arbitrary column names out of generated SQL.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Literal

from error_registry.core.pagination.exceptions import InvalidFieldError, InvalidRelationError

PaginationMode = Literal["offset", "keyset"]


@dataclass(frozen=True)
class QueryCapabilities:
    """Sort/filter/search/include allow-lists for one entity.

    Attributes:
        allowed_fields: API field names usable for sorting and filtering
        searchable_fields: Subset of ``allowed_fields`` matched by ``search``
        allowed_relations: API relation names accepted by ``include``
        field_map: API field name to model attribute, where they differ
        relation_map: API relation name to model relationship, where they differ
        id_field: API name of the unique tie-break field
        default_mode: Mode used when the request carries neither page nor cursor

    Example:
        CATEGORY_CAPABILITIES = QueryCapabilities(
            allowed_fields=frozenset({"id", "name", "createdAt"}),
            searchable_fields=frozenset({"name"}),
            allowed_relations=frozenset({"errorCodes"}),
            field_map={"createdAt": "created_at"},
            relation_map={"errorCodes": "error_codes"},
            default_mode="keyset",
        )
    """

    allowed_fields: frozenset[str]
    searchable_fields: frozenset[str] = frozenset()
    allowed_relations: frozenset[str] = frozenset()
    field_map: Mapping[str, str] = field(default_factory=dict)
    relation_map: Mapping[str, str] = field(default_factory=dict)
    id_field: str = "id"
    default_mode: PaginationMode = "offset"

    def __post_init__(self) -> None:
        if self.id_field not in self.allowed_fields:
            msg = f"id field '{self.id_field}' must be an allowed field"
            raise ValueError(msg)
        extra = self.searchable_fields - self.allowed_fields
        if extra:
            msg = f"searchable fields must be allowed fields: {', '.join(sorted(extra))}"
            raise ValueError(msg)

    def attribute_for(self, field_name: str) -> str:
        """Return the model attribute backing an API field."""
        return self.field_map.get(field_name, field_name)

    def relationship_for(self, relation: str) -> str:
        """Return the model relationship backing an API relation."""
        return self.relation_map.get(relation, relation)

    def validate_sort(self, field_name: str) -> str:
        """Check a sort field against the allow-list.

        Raises:
            InvalidFieldError: If the field is not allowed
        """
        if field_name not in self.allowed_fields:
            raise InvalidFieldError(field_name, self.allowed_fields, usage="sort")
        return field_name

    def validate_filters(
        self,
        filters: Mapping[str, str],
        *,
        strict: bool = True,
    ) -> tuple[dict[str, str], list[str]]:
        """Split filters into accepted ones and rejected keys.

        Args:
            filters: Field name to raw filter expression
            strict: Raise on the first unknown key instead of dropping it

        Returns:
            Tuple of (accepted filters, dropped keys)

        Raises:
            InvalidFieldError: If ``strict`` and a key is not allowed
        """
        accepted: dict[str, str] = {}
        dropped: list[str] = []
        for key, value in filters.items():
            if key in self.allowed_fields:
                accepted[key] = value
            elif strict:
                raise InvalidFieldError(key, self.allowed_fields, usage="filter")
            else:
                dropped.append(key)
        return accepted, dropped

    def parse_includes(self, include: str | None) -> list[str]:
        """Split a comma-separated include list and validate each entry.

        Raises:
            InvalidRelationError: If any requested relation is not allowed
        """
        if not include:
            return []

        requested = [r.strip() for r in include.split(",") if r.strip()]
        invalid = [r for r in requested if r not in self.allowed_relations]
        if invalid:
            raise InvalidRelationError(invalid, self.allowed_relations)

        # Preserve request order, drop duplicates
        return list(dict.fromkeys(requested))


__all__ = ["PaginationMode", "QueryCapabilities"]
