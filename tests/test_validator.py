"""Tests for the error-accumulating Validator."""

from dataclasses import dataclass

import pytest

from pathwise import Alternatives, Failure, Left, Right, Success, UnwrapError, Validator


@dataclass
class Signup:
    email: str
    password: str
    age: int


def _pairs(result):
    assert isinstance(result, Failure)
    return [e.to_pair() for e in result.errors]


SIGNUP = Validator.lift(
    Signup,
    Validator.string().required().email().field("email"),
    Validator.string().min(8).field("password"),
    Validator.int().field("age"),
)


class TestPrimitives:
    def test_messages(self):
        cases = [
            (Validator.string(), 1, "This field must be a string"),
            (Validator.int(), "x", "This field must be an integer"),
            (Validator.float(), "x", "This field must be a number"),
            (Validator.bool(), "x", "This field must be true or false"),
            (Validator.object(), 1, "This field must be an object"),
            (Validator.int().array(), 1, "This field must be an array"),
            (Validator.null(), 1, "This field must be null"),
        ]
        for validator, value, message in cases:
            assert _pairs(validator.validate(value)) == [("", message)]

    def test_coercion_matches_decoder(self):
        assert Validator.int().validate("12") == Success(12)
        assert Validator.float().validate("0.5") == Success(0.5)
        assert Validator.bool().validate("yes") == Success(True)
        assert Validator.mixed().validate([1]) == Success([1])
        assert Validator.null(0).validate(None) == Success(0)


class TestAccumulation:
    def test_lift_collects_every_bad_field(self):
        result = SIGNUP.validate({"email": "nope", "password": "short", "age": "x"})
        assert _pairs(result) == [
            (".email", "It's not a valid email address"),
            (".password", "Must be at least 8 characters"),
            (".age", "This field must be an integer"),
        ]

    def test_lift_success(self):
        data = {"email": "ada@gmail.com", "password": "long enough", "age": "36"}
        assert SIGNUP.validate(data) == Success(Signup("ada@gmail.com", "long enough", 36))

    def test_array_collects_every_bad_element(self):
        result = Validator.int().array().field("scores").validate({"scores": [1, "a", 2, "b"]})
        assert _pairs(result) == [
            (".scores[1]", "This field must be an integer"),
            (".scores[3]", "This field must be an integer"),
        ]

    def test_array_success(self):
        assert Validator.int().array().validate(["1", 2]) == Success([1, 2])

    def test_nested_objects(self):
        address = Validator.lift(
            lambda city, zip_code: (city, zip_code),
            Validator.string().required().field("city"),
            Validator.string().max(5).field("zip"),
        )
        person = Validator.lift(
            lambda name, addr: (name, addr),
            Validator.string().field("name"),
            address.field("address"),
        )
        result = person.validate({"name": 3, "address": {"city": "", "zip": "123456"}})
        assert _pairs(result) == [
            (".name", "This field must be a string"),
            (".address.city", "This field is required"),
            (".address.zip", "Must not be greater than 5 characters"),
        ]

    def test_bind_stops_at_first_failure(self):
        validator = Validator.string().bind(lambda s: Validator.fail("unreachable"))
        assert _pairs(validator.validate(1)) == [("", "This field must be a string")]


class TestAlternatives:
    def test_one_of_first_success(self):
        validator = Validator.one_of([Validator.int(), Validator.string()])
        assert validator.validate("x") == Success("x")

    def test_one_of_flattens_errors(self):
        both = Validator.lift(
            lambda a, b: (a, b),
            Validator.int().field("a"),
            Validator.int().field("b"),
        )
        validator = Validator.one_of([both, Validator.string()])
        result = validator.validate({"a": "x", "b": "y"})
        assert isinstance(result, Failure)
        assert len(result.errors) == 1
        alternatives = result.errors.head
        assert isinstance(alternatives, Alternatives)
        assert [e.to_pair() for e in alternatives.errors] == [
            (".a", "This field must be an integer"),
            (".b", "This field must be an integer"),
            ("", "This field must be a string"),
        ]

    def test_nullable(self):
        validator = Validator.string().nullable().field("nick")
        assert validator.validate({}) == Success(None)
        assert validator.validate({"nick": "ace"}) == Success("ace")
        result = validator.validate({"nick": 1})
        assert _pairs(result) == [
            (".nick", "This field must be null / This field must be a string")
        ]


class TestChecks:
    def test_required(self):
        assert _pairs(Validator.string().required().validate("")) == [("", "This field is required")]
        assert Validator.int().required().validate(0) == Success(0)
        assert Validator.bool().required().validate(False) == Success(False)

    def test_max(self):
        assert _pairs(Validator.string().max(2).validate("abc")) == [
            ("", "Must not be greater than 2 characters")
        ]


class TestConversion:
    def test_to_decoder_keeps_first_error(self):
        decoder = SIGNUP.to_decoder()
        result = decoder.decode({"email": "nope", "password": "short", "age": 1})
        assert isinstance(result, Left)
        assert result.error.to_pair() == (".email", "It's not a valid email address")

    def test_to_decoder_success(self):
        assert Validator.int().to_decoder().decode("3") == Right(3)

    def test_unwrap_lists_every_error(self):
        with pytest.raises(UnwrapError) as exc_info:
            SIGNUP.validate({"email": "", "password": "", "age": None}).unwrap()
        assert len(exc_info.value.errors) == 3
        assert "This field is required" in str(exc_info.value)
