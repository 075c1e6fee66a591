"""Tests for the Either and validation outcome types."""

import pytest

from pathwise import Failure, Left, Right, Seq, Success, Terminal, UnwrapError


def _errors(*messages):
    return Seq.from_iterable(Terminal(m, None) for m in messages)


class TestEither:
    def test_map_only_touches_right(self):
        assert Right(2).map(lambda x: x * 3) == Right(6)
        assert Left("e").map(lambda x: x * 3) == Left("e")

    def test_map_left(self):
        assert Left(1).map_left(str) == Left("1")
        assert Right(1).map_left(str) == Right(1)

    def test_bind_short_circuits(self):
        calls = []

        def step(x):
            calls.append(x)
            return Right(x + 1)

        assert Right(1).bind(step) == Right(2)
        assert Left("boom").bind(step) == Left("boom")
        assert calls == [1]

    def test_apply(self):
        assert Right(lambda x: x + 1).apply(Right(1)) == Right(2)
        assert Right(lambda x: x + 1).apply(Left("b")) == Left("b")
        assert Left("a").apply(Left("b")) == Left("a")

    def test_or_else(self):
        assert Left("e").or_else(lambda e: Right(e * 2)) == Right("ee")
        assert Right(1).or_else(lambda e: Right(2)) == Right(1)

    def test_unwrap(self):
        assert Right(5).unwrap() == 5
        with pytest.raises(UnwrapError) as exc_info:
            Left(Terminal("Expecting an INT", "x")).unwrap()
        assert "Expecting an INT" in str(exc_info.value)
        assert exc_info.value.errors.head == Terminal("Expecting an INT", "x")

    def test_unwrap_or_else(self):
        assert Left("e").unwrap_or_else(lambda e: "default") == "default"
        assert Right(1).unwrap_or_else(lambda e: "default") == 1

    def test_flags(self):
        assert Right(1).is_right() and not Right(1).is_left()
        assert Left(1).is_left() and not Left(1).is_right()


class TestOutcome:
    def test_failure_must_not_be_empty(self):
        with pytest.raises(ValueError):
            Failure(Seq.empty())

    def test_apply_accumulates(self):
        both = Failure(_errors("a")).apply(Failure(_errors("b", "c")))
        assert isinstance(both, Failure)
        assert [e.message for e in both.errors] == ["a", "b", "c"]

    def test_apply_single_failure(self):
        left_only = Failure(_errors("a")).apply(Success(1))
        right_only = Success(lambda x: x).apply(Failure(_errors("b")))
        assert [e.message for e in left_only.errors] == ["a"]
        assert [e.message for e in right_only.errors] == ["b"]

    def test_apply_success(self):
        assert Success(lambda x: x * 2).apply(Success(4)) == Success(8)

    def test_bind_short_circuits(self):
        failure = Failure(_errors("a"))
        assert failure.bind(lambda x: Failure(_errors("b"))) is failure
        assert Success(1).bind(lambda x: Success(x + 1)) == Success(2)

    def test_map_failure(self):
        failure = Failure(_errors("a")).map_failure(lambda es: es.map(lambda e: e.field("x")))
        assert failure.errors.head.name == "x"

    def test_unwrap_joins_messages(self):
        with pytest.raises(UnwrapError) as exc_info:
            Failure(_errors("first", "second")).unwrap()
        assert str(exc_info.value) == (
            "Problem with the given value: null: first; "
            "Problem with the given value: null: second"
        )
        assert len(exc_info.value.errors) == 2

    def test_to_either_keeps_first_error(self):
        assert Failure(_errors("a", "b")).to_either() == Left(Terminal("a", None))
        assert Success(3).to_either() == Right(3)
