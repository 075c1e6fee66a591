"""Property-based tests for the containers, coercion and error paths."""

from hypothesis import given
from hypothesis import strategies as st

from pathwise import Decoder, Right, Seq, Terminal, Validator

json_values = st.recursive(
    st.none() | st.booleans() | st.integers() | st.floats(allow_nan=False) | st.text(),
    lambda children: st.lists(children, max_size=4)
    | st.dictionaries(st.text(max_size=5), children, max_size=4),
    max_leaves=20,
)

seqs = st.lists(st.integers(), max_size=20).map(Seq.from_iterable)


@st.composite
def identifier_paths(draw):
    """A list of identifier-like field names."""
    return draw(
        st.lists(st.from_regex(r"[a-z][a-z0-9_]{0,8}", fullmatch=True), min_size=1, max_size=5)
    )


def _spread(x):
    return Seq.from_iterable([x, x + 1])


def _double(x):
    return Seq.singleton(x * 2)


class TestSeqLaws:
    """Monoid and monad laws for Seq."""

    @given(seqs, seqs, seqs)
    def test_append_is_associative(self, a, b, c):
        assert (a + b) + c == a + (b + c)

    @given(seqs)
    def test_empty_is_identity(self, s):
        assert s + Seq.empty() == s
        assert Seq.empty() + s == s

    @given(st.integers())
    def test_left_identity(self, x):
        assert Seq.pure(x).bind(_spread) == _spread(x)

    @given(seqs)
    def test_right_identity(self, s):
        assert s.bind(Seq.pure) == s

    @given(seqs)
    def test_bind_is_associative(self, s):
        assert s.bind(_spread).bind(_double) == s.bind(lambda x: _spread(x).bind(_double))

    @given(seqs)
    def test_map_composes(self, s):
        assert s.map(lambda x: x + 1).map(lambda x: x * 3) == s.map(lambda x: (x + 1) * 3)

    @given(seqs, seqs)
    def test_length_and_order(self, a, b):
        joined = a + b
        assert len(joined) == len(a) + len(b)
        assert joined.to_list() == a.to_list() + b.to_list()
        assert joined.reverse().reverse() == joined


class TestCoercionProperties:
    @given(st.integers())
    def test_int_reads_its_own_text(self, n):
        assert Decoder.int().decode(str(n)) == Right(n)
        assert Decoder.int().decode(n) == Right(n)

    @given(st.floats(allow_nan=False, allow_infinity=False))
    def test_float_reads_its_own_repr(self, x):
        assert Decoder.float().decode(repr(x)) == Right(x)

    @given(st.booleans())
    def test_bool_reads_its_own_word(self, b):
        assert Decoder.bool().decode(str(b).lower()) == Right(b)
        assert Decoder.bool().decode(int(b)) == Right(b)

    @given(st.integers() | st.floats() | st.booleans() | st.none())
    def test_string_rejects_non_strings(self, value):
        assert Decoder.string().decode(value).is_left()


class TestDecodingProperties:
    @given(json_values)
    def test_decoding_is_repeatable(self, value):
        decoder = Decoder.one_of([Decoder.int(), Decoder.string().array()]).nullable()
        assert decoder.decode(value) == decoder.decode(value)

    @given(json_values)
    def test_mixed_accepts_everything(self, value):
        assert Decoder.mixed().decode(value) == Right(value)

    @given(st.lists(st.integers() | st.from_regex(r"[a-z]{1,6}", fullmatch=True), max_size=10))
    def test_validator_reports_each_bad_element(self, items):
        result = Validator.int().array().validate(items)
        bad = [i for i, item in enumerate(items) if isinstance(item, str)]
        if bad:
            assert [e.to_pair()[0] for e in result.errors] == [f"[{i}]" for i in bad]
        else:
            assert result.value == items

    @given(identifier_paths())
    def test_field_path_rendering(self, names):
        error = Terminal("bad", None)
        for name in reversed(names):
            error = error.field(name)
        assert error.to_pair() == ("".join(f".{name}" for name in names), "bad")
