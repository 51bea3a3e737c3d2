"""Either tests — exactly one side, fold, chaining.

Tests cover:
    - left/right factories and side predicates
    - Accessing the absent side raises EitherAccessError
    - None payloads rejected
    - fold runs one branch; map / map_left / bind respect the side
    - Structural pattern matching on Left / Right
"""

import pytest

from pangolin.core.either import Either, Left, Right
from pangolin.core.errors import EitherAccessError


def test_right_holds_value():
    result = Either.right(42)
    assert result.is_right
    assert not result.is_left
    assert result.right_value == 42


def test_left_holds_value():
    result = Either.left("boom")
    assert result.is_left
    assert result.left_value == "boom"


def test_wrong_side_access_raises():
    with pytest.raises(EitherAccessError):
        Either.right(1).left_value
    with pytest.raises(LookupError):
        Either.left("x").right_value


@pytest.mark.parametrize("factory", [Either.left, Either.right])
def test_none_payload_rejected(factory):
    with pytest.raises(TypeError):
        factory(None)


def test_base_class_not_instantiable():
    with pytest.raises(TypeError):
        Either()


def test_fold_runs_single_branch():
    calls: list[str] = []

    def on_left(v):
        calls.append("left")
        return f"L:{v}"

    def on_right(v):
        calls.append("right")
        return f"R:{v}"

    assert Either.right(1).fold(on_left, on_right) == "R:1"
    assert Either.left(2).fold(on_left, on_right) == "L:2"
    assert calls == ["right", "left"]


def test_fold_requires_both_functions():
    with pytest.raises(TypeError):
        Either.right(1).fold(None, str)


def test_map_transforms_right_only():
    assert Either.right(2).map(lambda v: v * 10).right_value == 20
    left = Either.left("err")
    assert left.map(lambda v: v * 10) is left


def test_map_left_transforms_left_only():
    assert Either.left("err").map_left(str.upper).left_value == "ERR"
    assert Either.right(1).map_left(str.upper).right_value == 1


def test_bind_chains_and_short_circuits():
    def half(v: int) -> Either:
        return Either.right(v // 2) if v % 2 == 0 else Either.left(f"{v} is odd")

    assert Either.right(8).bind(half).bind(half).right_value == 2
    assert Either.right(6).bind(half).bind(half).left_value == "3 is odd"


def test_bind_must_return_either():
    with pytest.raises(TypeError):
        Either.right(1).bind(lambda v: v + 1)


def test_get_or_else():
    assert Either.right(1).get_or_else(0) == 1
    assert Either.left("x").get_or_else(0) == 0


def test_pattern_matching():
    match Either.left("nope"):
        case Right(value):
            outcome = f"ok {value}"
        case Left(value):
            outcome = f"failed {value}"
    assert outcome == "failed nope"


def test_equality_by_side_and_value():
    assert Either.right(1) == Either.right(1)
    assert Either.left(1) != Either.right(1)
