"""JSON request body builder for create/update calls."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from typing import Any

DATE_FORMAT = "%Y-%m-%d"


class Body:
    """Ordered key/value payload sent with POST and PUT requests.

    Setting a key to ``None`` drops it from the payload. Use :meth:`put_null`
    when GitLab must receive an explicit ``null`` to clear a field.
    """

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}

    def _put(self, key: str, value: Any) -> Body:
        if value is None:
            self._data.pop(key, None)
        else:
            self._data[key] = value
        return self

    def put_string(self, key: str, value: str | None) -> Body:
        return self._put(key, value)

    def put_int(self, key: str, value: int | None) -> Body:
        return self._put(key, value)

    def put_bool(self, key: str, value: bool | None) -> Body:
        return self._put(key, value)

    def put_date(self, key: str, value: date | None) -> Body:
        return self._put(key, None if value is None else value.strftime(DATE_FORMAT))

    def put_int_array(self, key: str, values: Iterable[int] | None) -> Body:
        return self._put(key, None if values is None else [int(v) for v in values])

    def put_string_array(self, key: str, values: Iterable[str] | None) -> Body:
        return self._put(key, None if values is None else [str(v) for v in values])

    def put_null(self, key: str) -> Body:
        self._data[key] = None
        return self

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Body({self._data!r})"
