"""Property-based tests for the functor and monad laws.

Every law is checked over both variants with generated payloads, so a
regression in either ``Success`` or ``Failure`` shows up as a falsifying
example rather than a single hand-picked case.
"""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st
import pytest

from fallible import Failure, Success, failure, success

pytestmark = [pytest.mark.unit, pytest.mark.contract]

payloads = st.one_of(st.integers(), st.text(max_size=10), st.none())
results = st.one_of(payloads.map(success), payloads.map(failure))


def f(x: object) -> tuple[str, object]:
    return ("f", x)


def g(x: object) -> list[object]:
    return [x, x]


def kleisli(x: object) -> Success[object] | Failure[object]:
    return failure(("rejected", x)) if isinstance(x, int) and x % 2 else success(("ok", x))


@given(results)
def test_functor_identity(r) -> None:
    assert r.map(lambda x: x) == r


@given(results)
def test_functor_composition(r) -> None:
    assert r.map(f).map(g) == r.map(lambda x: g(f(x)))


@given(payloads)
def test_monad_left_identity(v) -> None:
    assert success(v).flat_map(kleisli) == kleisli(v)


@given(results)
def test_monad_right_identity(r) -> None:
    assert r.flat_map(success) == r


@given(results)
def test_monad_associativity(r) -> None:
    assert r.flat_map(kleisli).flat_map(kleisli) == r.flat_map(
        lambda x: kleisli(x).flat_map(kleisli)
    )


@given(payloads)
def test_map_err_is_identity_on_success(v) -> None:
    assert success(v).map_err(g) == success(v)


@given(payloads)
def test_map_is_identity_on_failure(e) -> None:
    assert failure(e).map(f) == failure(e)


@given(results, payloads)
def test_get_or_else_never_raises(r, default) -> None:
    expected = r.value if isinstance(r, Success) else default
    assert r.get_or_else(default) == expected


@given(results)
def test_exactly_one_predicate_holds(r) -> None:
    assert r.is_success() != r.is_failure()
