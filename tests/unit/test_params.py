"""Tests for query string encoding."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from urllib.parse import parse_qsl

import pytest

from gitlab_api.exceptions import GitLabEncodingError
from gitlab_api.pagination import Pagination
from gitlab_api.params import QueryParams


class TestEncoding:
    def test_empty_renders_nothing(self):
        assert str(QueryParams()) == ""

    def test_string(self):
        params = QueryParams().add_string("search", "fix bug")
        assert str(params) == "?search=fix+bug"

    def test_int_and_bool(self):
        params = QueryParams().add_int("author_id", 7).add_bool("active", True)
        assert str(params) == "?author_id=7&active=true"

    def test_false_is_kept(self):
        assert str(QueryParams().add_bool("archived", False)) == "?archived=false"

    def test_ints_are_comma_joined_and_encoded(self):
        params = QueryParams().add_ints("iids[]", [1, 2, 3])
        assert str(params) == "?iids%5B%5D=1%2C2%2C3"

    @pytest.mark.parametrize("method", ["add_strings", "add_ints"])
    def test_bare_string_is_rejected(self, method):
        with pytest.raises(TypeError, match="labels"):
            getattr(QueryParams(), method)("labels", "bug")

    def test_strings_are_comma_joined(self):
        params = QueryParams().add_strings("labels", ["bug", "needs review"])
        assert str(params) == "?labels=bug%2Cneeds+review"

    def test_date(self):
        params = QueryParams().add_date("due", date(2024, 3, 9))
        assert list(params.items()) == [("due", "2024-03-09")]

    def test_datetime_is_converted_to_utc(self):
        cest = timezone(timedelta(hours=2))
        params = QueryParams().add_datetime("since", datetime(2024, 1, 2, 3, 4, 5, tzinfo=cest))
        assert list(params.items()) == [("since", "2024-01-02T01:04:05Z")]
        assert str(params) == "?since=2024-01-02T01%3A04%3A05Z"

    def test_naive_datetime_is_local_time(self):
        naive = datetime(2024, 6, 1, 12, 0, 0)
        expected = naive.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        params = QueryParams().add_datetime("until", naive)
        assert list(params.items()) == [("until", expected)]

    def test_absent_values_are_skipped(self):
        params = (
            QueryParams()
            .add_string("a", None)
            .add_int("b", None)
            .add_bool("c", None)
            .add_ints("d", [])
            .add_strings("e", None)
            .add_date("f", None)
            .add_datetime("g", None)
        )
        assert len(params) == 0
        assert str(params) == ""

    def test_insertion_order_is_preserved(self):
        params = QueryParams().add_string("z", "1").add_string("a", "2").add_string("m", "3")
        assert str(params) == "?z=1&a=2&m=3"

    def test_round_trip(self):
        params = (
            QueryParams()
            .add_string("search", "a&b=c d/é")
            .add_int("page", 3)
            .add_ints("iids[]", [4, 5])
            .add_strings("labels", ["x,y", "z"])
            .add_date("due", date(2024, 1, 1))
        )
        assert parse_qsl(str(params)[1:]) == list(params.items())

    def test_unencodable_value_raises(self):
        with pytest.raises(GitLabEncodingError) as exc_info:
            QueryParams().add_string("search", "bad \ud800")
        assert exc_info.value.name == "search"


class TestPaginationParams:
    def test_appends_per_page_then_page(self):
        params = QueryParams().add_pagination(Pagination.of(2, 50))
        assert list(params.items()) == [("per_page", "50"), ("page", "2")]

    def test_repeated_pagination_appends_again(self):
        params = QueryParams()
        params.add_pagination(Pagination.of(1, 20)).add_pagination(Pagination.of(3, 10))
        assert str(params) == "?per_page=20&page=1&per_page=10&page=3"

    def test_large_page_size_is_sent(self):
        params = QueryParams().add_pagination(Pagination.of(1, 500))
        assert str(params) == "?per_page=500&page=1"
