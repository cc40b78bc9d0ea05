"""Query string encoding for listing filters."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from datetime import date, datetime, timezone
from typing import NamedTuple
from urllib.parse import quote_plus

from .exceptions import GitLabEncodingError
from .pagination import Pagination

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


class _Param(NamedTuple):
    name: str
    raw: str
    encoded: str


def _encode(name: str, value: str) -> str:
    try:
        return f"{quote_plus(name, safe='')}={quote_plus(value, safe='')}"
    except UnicodeEncodeError as e:
        raise GitLabEncodingError(name, value) from e


def _as_list(name: str, values: Iterable | None) -> list:
    if isinstance(values, str):
        msg = f"{name} expects a list of values, got the string {values!r}"
        raise TypeError(msg)
    return list(values or [])


class QueryParams:
    """Append-only list of URL query parameters.

    Parameters render in the order they were added. Absent values (``None``
    or an empty list) are skipped, and repeated names are kept as-is.
    """

    def __init__(self) -> None:
        self._params: list[_Param] = []

    def add_string(self, name: str, value: str | None) -> QueryParams:
        if value is not None:
            self._params.append(_Param(name, value, _encode(name, value)))
        return self

    def add_int(self, name: str, value: int | None) -> QueryParams:
        if value is None:
            return self
        return self.add_string(name, str(int(value)))

    def add_bool(self, name: str, value: bool | None) -> QueryParams:
        if value is None:
            return self
        return self.add_string(name, "true" if value else "false")

    def add_strings(self, name: str, values: Iterable[str] | None) -> QueryParams:
        values = _as_list(name, values)
        if not values:
            return self
        return self.add_string(name, ",".join(values))

    def add_ints(self, name: str, values: Iterable[int] | None) -> QueryParams:
        values = _as_list(name, values)
        if not values:
            return self
        return self.add_string(name, ",".join(str(int(v)) for v in values))

    def add_date(self, name: str, value: date | None) -> QueryParams:
        if value is None:
            return self
        return self.add_string(name, value.strftime(DATE_FORMAT))

    def add_datetime(self, name: str, value: datetime | None) -> QueryParams:
        """Add a timestamp in UTC. Naive datetimes are read as local time."""
        if value is None:
            return self
        return self.add_string(name, value.astimezone(timezone.utc).strftime(DATETIME_FORMAT))

    def add_pagination(self, pagination: Pagination) -> QueryParams:
        self.add_int("per_page", pagination.page_size)
        return self.add_int("page", pagination.page_number)

    def items(self) -> Iterator[tuple[str, str]]:
        for param in self._params:
            yield param.name, param.raw

    def __len__(self) -> int:
        return len(self._params)

    def __str__(self) -> str:
        if not self._params:
            return ""
        return "?" + "&".join(p.encoded for p in self._params)

    def __repr__(self) -> str:
        return f"QueryParams({list(self.items())!r})"
