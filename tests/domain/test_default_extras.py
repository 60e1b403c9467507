"""Tests for the DefaultExtras selector."""

from __future__ import annotations

import copy
import pickle

import pytest
from pydantic import BaseModel, ValidationError

from extrakit.domain.extras import (
    SENTINEL_MISMATCH_MESSAGE,
    DefaultExtras,
    ExtraName,
    ExtrasFormatError,
)
from extrakit.domain.names import InvalidNameError


class _Table(BaseModel):
    default_extras: DefaultExtras = DefaultExtras()


class TestVariants:
    def test_default_is_empty_list(self) -> None:
        default = DefaultExtras()
        assert default == DefaultExtras.default()
        assert default == DefaultExtras.from_list([])
        assert default.extras == ()
        assert not default.is_all

    def test_all(self) -> None:
        everything = DefaultExtras.all()
        assert everything.is_all
        assert everything.extras is None

    def test_all_is_not_empty_list(self) -> None:
        assert DefaultExtras.all() != DefaultExtras()
        assert len({DefaultExtras.all(), DefaultExtras()}) == 2

    def test_list_preserves_order_and_duplicates(self) -> None:
        extras = DefaultExtras(["b", "a", "B"])
        assert extras.extras == (ExtraName("b"), ExtraName("a"), ExtraName("b"))

    def test_constructor_normalizes_strings(self) -> None:
        assert DefaultExtras(["Foo_Bar"]) == DefaultExtras([ExtraName("foo-bar")])

    def test_constructor_rejects_bare_string(self) -> None:
        with pytest.raises(TypeError):
            DefaultExtras("all")  # type: ignore[arg-type]

    def test_immutable(self) -> None:
        extras = DefaultExtras(["a"])
        with pytest.raises(AttributeError):
            extras._extras = None  # type: ignore[misc]

    def test_repr(self) -> None:
        assert repr(DefaultExtras.all()) == "DefaultExtras.all()"
        assert repr(DefaultExtras(["a"])) == "DefaultExtras([ExtraName('a')])"

    def test_copy_and_pickle(self) -> None:
        for value in (DefaultExtras.all(), DefaultExtras(), DefaultExtras(["x", "y"])):
            assert copy.deepcopy(value) == value
            assert pickle.loads(pickle.dumps(value)) == value


class TestOrdering:
    def test_all_sorts_first(self) -> None:
        assert DefaultExtras.all() < DefaultExtras()
        assert DefaultExtras.all() < DefaultExtras(["a"])

    def test_lists_compare_element_wise(self) -> None:
        assert DefaultExtras(["a"]) < DefaultExtras(["a", "b"])
        assert DefaultExtras(["a", "z"]) < DefaultExtras(["b"])


class TestResolve:
    def test_all_expands_to_available(self) -> None:
        available = [ExtraName("docs"), ExtraName("cli")]
        assert DefaultExtras.all().resolve(available) == (ExtraName("docs"), ExtraName("cli"))

    def test_list_is_returned_unchanged(self) -> None:
        extras = DefaultExtras(["cli", "cli", "unknown"])
        assert extras.resolve([ExtraName("cli")]) == (
            ExtraName("cli"),
            ExtraName("cli"),
            ExtraName("unknown"),
        )

    def test_empty_list_selects_nothing(self) -> None:
        assert DefaultExtras().resolve([ExtraName("docs")]) == ()


class TestToData:
    def test_all(self) -> None:
        assert DefaultExtras.all().to_data() == "all"

    def test_empty(self) -> None:
        assert DefaultExtras().to_data() == []

    def test_list(self) -> None:
        assert DefaultExtras(["Foo", "bar_baz"]).to_data() == ["foo", "bar-baz"]


class TestFromData:
    def test_sentinel(self) -> None:
        assert DefaultExtras.from_data("all") == DefaultExtras.all()

    @pytest.mark.parametrize("value", ["ALL", "All", " all", "all ", "", "everything"])
    def test_sentinel_is_exact(self, value: str) -> None:
        with pytest.raises(ExtrasFormatError) as exc_info:
            DefaultExtras.from_data(value)
        assert str(exc_info.value) == SENTINEL_MISMATCH_MESSAGE

    def test_sequence(self) -> None:
        result = DefaultExtras.from_data(["Foo", "bar_baz"])
        assert result == DefaultExtras([ExtraName("foo"), ExtraName("bar-baz")])
        assert result.extras == (ExtraName("foo"), ExtraName("bar-baz"))

    def test_tuple(self) -> None:
        assert DefaultExtras.from_data(("a",)) == DefaultExtras(["a"])

    def test_list_containing_all_is_a_list(self) -> None:
        result = DefaultExtras.from_data(["all"])
        assert result == DefaultExtras([ExtraName("all")])
        assert not result.is_all

    def test_empty_sequence(self) -> None:
        assert DefaultExtras.from_data([]) == DefaultExtras()

    def test_invalid_element(self) -> None:
        with pytest.raises(InvalidNameError) as exc_info:
            DefaultExtras.from_data(["ok", "not ok"])
        assert exc_info.value.name == "not ok"

    def test_non_string_element(self) -> None:
        with pytest.raises(ExtrasFormatError, match="expected a string"):
            DefaultExtras.from_data(["ok", 1])

    @pytest.mark.parametrize(
        "value,kind",
        [
            (1, "integer `1`"),
            (1.5, "floating point `1.5`"),
            (True, "boolean `true`"),
            (None, "null"),
            ({"all": True}, "map"),
        ],
    )
    def test_wrong_shape(self, value: object, kind: str) -> None:
        with pytest.raises(ExtrasFormatError) as exc_info:
            DefaultExtras.from_data(value)
        assert str(exc_info.value) == (
            f'invalid type: {kind}, expected the string "all" or a list of strings'
        )


class TestPydantic:
    def test_default(self) -> None:
        assert _Table().default_extras == DefaultExtras()

    def test_sentinel(self) -> None:
        assert _Table.model_validate({"default_extras": "all"}).default_extras.is_all

    def test_sentinel_mismatch_message(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            _Table.model_validate({"default_extras": "ALL"})
        error = exc_info.value.errors()[0]
        assert error["type"] == "default_extras"
        assert error["msg"] == 'default-extras must be "all" or a ["list", "of", "extras"]'

    def test_element_error_message(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            _Table.model_validate({"default_extras": ["fine", "has space"]})
        error = exc_info.value.errors()[0]
        assert error["type"] == "invalid_extra_name"
        assert error["msg"] == str(InvalidNameError("has space"))

    def test_type_mismatch_message(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            _Table.model_validate({"default_extras": None})
        assert exc_info.value.errors()[0]["msg"] == (
            'invalid type: null, expected the string "all" or a list of strings'
        )

    def test_dump(self) -> None:
        assert _Table(default_extras=DefaultExtras.all()).model_dump() == {"default_extras": "all"}
        assert _Table().model_dump() == {"default_extras": []}
        assert _Table(default_extras=DefaultExtras(["A"])).model_dump_json() == (
            '{"default_extras":["a"]}'
        )
