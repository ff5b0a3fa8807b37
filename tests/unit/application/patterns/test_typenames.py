"""Tests for application/patterns/typenames.py."""

import pytest

from dinavigator.application.patterns.typenames import (
    UNKNOWN_TYPE,
    normalize_type,
    parameter_types,
    split_top_level,
)


class TestNormalizeType:
    """Tests for normalize_type."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("IClock", "IClock"),
            ("IRepository< User,int >", "IRepository<User, int>"),
            ("IDictionary<string,\n    List<int>>", "IDictionary<string, List<int>>"),
            ("global::App.IClock?", "App.IClock"),
            ("App.Services.IMailer", "App.Services.IMailer"),
            ("IRepo<>", "IRepo<>"),
            ("IHandler[]", "IHandler[]"),
        ],
    )
    def test_normalizes(self, raw: str, expected: str) -> None:
        assert normalize_type(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["", "   ", "string", "int", "CancellationToken", "Task<int>", "1Clock", "Foo-Bar"],
    )
    def test_unusable_is_unknown(self, raw: str) -> None:
        assert normalize_type(raw) == UNKNOWN_TYPE


class TestSplitTopLevel:
    """Tests for split_top_level."""

    def test_ignores_nested_separators(self) -> None:
        text = "IDictionary<string, int> map, Func<int, (int, int)> pair, IClock clock"
        assert split_top_level(text) == (
            "IDictionary<string, int> map",
            "Func<int, (int, int)> pair",
            "IClock clock",
        )

    def test_drops_empty_pieces(self) -> None:
        assert split_top_level(" a ,, b ,") == ("a", "b")

    def test_empty(self) -> None:
        assert split_top_level("") == ()


class TestParameterTypes:
    """Tests for parameter_types."""

    def test_attributes_and_defaults_stripped(self) -> None:
        params = "[FromServices] IClock clock, ILogger<Foo> logger = null"
        assert parameter_types(params) == ("IClock", "ILogger<Foo>")

    def test_attribute_arguments_and_default_calls_stripped(self) -> None:
        params = (
            '[FromKeyedServices("a, b")] IClock clock, '
            "CancellationToken ct = default(CancellationToken)"
        )
        assert parameter_types(params) == ("IClock", UNKNOWN_TYPE)

    def test_modifiers_stripped(self) -> None:
        assert parameter_types("this IServiceCollection services") == ("IServiceCollection",)
        assert parameter_types("params IHandler[] handlers") == ("IHandler[]",)

    def test_builtin_parameters_are_unknown(self) -> None:
        assert parameter_types("string name, int count") == (UNKNOWN_TYPE, UNKNOWN_TYPE)

    def test_unparsable_parameter_is_unknown(self) -> None:
        assert parameter_types("clock") == (UNKNOWN_TYPE,)

    def test_empty_list(self) -> None:
        assert parameter_types("") == ()
        assert parameter_types("  ") == ()
