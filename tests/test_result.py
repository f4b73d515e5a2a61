"""Tests for catalogcli.result -- Success / Error / Loading and their helpers."""

from __future__ import annotations

import dataclasses

import pytest

from catalogcli.exceptions import NetworkFailure, NotFoundError
from catalogcli.result import (
    LOADING,
    Error,
    Loading,
    Success,
    get_or_none,
    map_result,
    on_error,
    on_success,
)


class TestVariants:
    def test_success_holds_data(self) -> None:
        assert Success([1, 2]).data == [1, 2]

    def test_error_defaults(self) -> None:
        err = Error("bad")
        assert err.message == "bad"
        assert err.code is None
        assert err.cause is None

    def test_variants_are_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            Success(1).data = 2  # type: ignore[misc]
        with pytest.raises(dataclasses.FrozenInstanceError):
            Error("x").message = "y"  # type: ignore[misc]

    def test_loading_singleton_equality(self) -> None:
        assert LOADING == Loading()
        assert isinstance(LOADING, Loading)

    def test_error_from_failure(self) -> None:
        failure = NotFoundError("HTTP 404: Product with id '999' not found", status_code=404)
        err = Error.from_failure(failure)
        assert err.message == "HTTP 404: Product with id '999' not found"
        assert err.code == 404
        assert err.cause is failure

    def test_error_from_transport_failure_has_no_code(self) -> None:
        err = Error.from_failure(NetworkFailure("timed out"))
        assert err.code is None


class TestHelpers:
    def test_map_success(self) -> None:
        assert map_result(Success(2), lambda x: x * 10) == Success(20)

    def test_map_passes_error_and_loading_through(self) -> None:
        err = Error("bad")
        assert map_result(err, lambda x: x * 10) is err
        assert map_result(LOADING, lambda x: x * 10) is LOADING

    def test_get_or_none(self) -> None:
        assert get_or_none(Success("v")) == "v"
        assert get_or_none(Error("bad")) is None
        assert get_or_none(LOADING) is None

    def test_on_success_runs_only_for_success(self) -> None:
        seen: list = []
        result = Success(5)
        assert on_success(result, seen.append) is result
        on_success(Error("bad"), seen.append)
        on_success(LOADING, seen.append)
        assert seen == [5]

    def test_on_error_receives_message_code_and_cause(self) -> None:
        seen: list = []
        cause = NetworkFailure("down", status_code=503)
        err = Error("down", 503, cause)
        assert on_error(err, lambda m, c, e: seen.append((m, c, e))) is err
        on_error(Success(1), lambda m, c, e: seen.append("never"))
        assert seen == [("down", 503, cause)]
