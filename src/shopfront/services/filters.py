"""Product listing filter set.

A filter set is the flat group of parameters that drives a product
listing request: pagination, sort, category/tag, price bounds, stock and
trending flags, and free-text search. Its camelCase mapping is what goes
on the wire, and its sorted-key JSON form is its identity (two filter
sets are equal exactly when their canonical keys are equal).
"""

from __future__ import annotations

from typing import Any, Literal, Mapping, Union

import orjson
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from shopfront.shared.constants import CatalogDefaults, FilterKeys, SortField, SortOrder
from shopfront.shared.errors import ErrorCode, create_validation_error

# "" means "not set"; such values never reach the query string
PriceBound = Union[float, Literal[""]]
Flag = Union[bool, Literal[""]]


class FilterSet(BaseModel):
    """Immutable listing filter set.

    Build new sets with :meth:`with_changes` rather than mutating.

    Example:
        >>> f = FilterSet().with_changes(page=3, sortBy="price")
        >>> f.with_changes(category="shoes").page
        1
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )

    page: int = Field(default=CatalogDefaults.PAGE, gt=0)
    limit: int = Field(default=CatalogDefaults.LIMIT, gt=0)
    sort_by: str = Field(default=CatalogDefaults.SORT_BY, alias=FilterKeys.SORT_BY)
    order: str = Field(default=CatalogDefaults.ORDER)
    category: str = ""
    tag: str = ""
    min_price: PriceBound = Field(default="", alias=FilterKeys.MIN_PRICE)
    max_price: PriceBound = Field(default="", alias=FilterKeys.MAX_PRICE)
    in_stock: Flag = Field(default="", alias=FilterKeys.IN_STOCK)
    is_trending: Flag = Field(default="", alias=FilterKeys.IS_TRENDING)
    search: str = ""

    @field_validator("sort_by")
    @classmethod
    def _known_sort_field(cls, value: str) -> str:
        if value not in SortField.ALL:
            msg = f"sortBy must be one of {', '.join(SortField.ALL)}"
            raise ValueError(msg)
        return value

    @field_validator("order")
    @classmethod
    def _known_sort_order(cls, value: str) -> str:
        if value not in SortOrder.ALL:
            msg = f"order must be one of {', '.join(SortOrder.ALL)}"
            raise ValueError(msg)
        return value

    @field_validator("min_price", "max_price", "in_stock", "is_trending", mode="before")
    @classmethod
    def _none_is_unset(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("category", "tag", "search", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> FilterSet:
        """Build a filter set from wire (camelCase) or attribute names.

        Raises:
            DomainError: With INVALID_FILTER for unknown keys or bad values
        """
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            raise create_validation_error(
                message=f"Invalid filter set: {_first_problem(e)}",
                field=_first_field(e),
                operation="build_filter_set",
                code=ErrorCode.INVALID_FILTER,
                original_error=e,
            ) from e

    def to_mapping(self) -> dict[str, Any]:
        """Full camelCase mapping, empty values included."""
        return self.model_dump(by_alias=True)

    def with_changes(self, **changes: Any) -> FilterSet:
        """Return a copy with ``changes`` applied.

        Keys may be wire or attribute names. Changing anything other than
        ``page`` or ``limit`` sends the listing back to page 1, unless the
        same call sets ``page`` explicitly.
        """
        wire_changes = {_wire_name(key): value for key, value in changes.items()}
        merged = self.to_mapping()
        merged.update(wire_changes)

        resets_page = any(key not in FilterKeys.PAGINATION for key in wire_changes)
        if resets_page and FilterKeys.PAGE not in wire_changes:
            merged[FilterKeys.PAGE] = CatalogDefaults.PAGE

        return FilterSet.from_mapping(merged)

    def to_query_params(self) -> dict[str, str]:
        """Query-string parameters; empty values are left out."""
        params: dict[str, str] = {}
        for key, value in self.to_mapping().items():
            if value is None or value == "":
                continue
            params[key] = format_scalar(value)
        return params

    def cache_key(self) -> str:
        """Canonical serialization used as the cache key."""
        return orjson.dumps(self.to_mapping(), option=orjson.OPT_SORT_KEYS).decode()

    def has_active_filters(self) -> bool:
        """True when search, price bounds, category or tag is set, or the
        sort differs from newest first."""
        return bool(
            self.search
            or self.min_price != ""
            or self.max_price != ""
            or self.category
            or self.tag
            or self.sort_by != CatalogDefaults.SORT_BY
            or self.order != CatalogDefaults.ORDER,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FilterSet):
            return NotImplemented
        return self.cache_key() == other.cache_key()

    def __hash__(self) -> int:
        return hash(self.cache_key())


def format_scalar(value: Any) -> str:
    """Render a scalar the way the API expects it in text fields."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def default_filters(limit: int = CatalogDefaults.LIMIT) -> FilterSet:
    """Default listing filter set (newest first, page 1)."""
    return FilterSet(limit=limit)


_ATTRIBUTE_TO_WIRE = {
    name: field.alias or name for name, field in FilterSet.model_fields.items()
}


def _wire_name(key: str) -> str:
    return _ATTRIBUTE_TO_WIRE.get(key, key)


def _first_field(error: ValidationError) -> str | None:
    errors = error.errors()
    if not errors or not errors[0]["loc"]:
        return None
    return str(errors[0]["loc"][0])


def _first_problem(error: ValidationError) -> str:
    errors = error.errors()
    if not errors:
        return str(error)
    first = errors[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}" if location else first["msg"]


__all__ = ["FilterSet", "default_filters", "format_scalar"]
