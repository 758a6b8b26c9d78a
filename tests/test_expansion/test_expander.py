"""Tests for the variable expansion engine."""

import unittest
import pytest
from unittest.mock import Mock
from borr.lib.errors import CyclicExpansion
from borr.lib.expansion import VariableExpander, VariableResolver, variable_find


@pytest.fixture
def mock_resolver():
    resolver = Mock()
    resolver.resolve = Mock()
    return resolver


@pytest.fixture
def expander(mock_resolver):
    return VariableExpander(resolvers=[mock_resolver], max_rounds=4)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("Hello ${name}", "name"),
        ("${a} and ${b}", "a"),
        ("${section:field}", "section:field"),
        ("${_private1}", "_private1"),
        ("no variables", None),
        ("$name", None),
        ("${1abc}", None),
        ("${a:b:c}", None),
        ("${}", None),
        ("${with space}", None),
    ],
)
def test_variable_find(value: str, expected: str | None) -> None:
    assert variable_find(value) == expected


def test_basic_substitution(expander, mock_resolver) -> None:
    mock_resolver.resolve.return_value = "value"
    assert expander.expand("Hello ${var}") == "Hello value"
    mock_resolver.resolve.assert_called_once_with("var")


def test_multiple_substitutions(expander, mock_resolver) -> None:
    mock_resolver.resolve.side_effect = ["first", "second"]
    assert expander.expand("${var1} and ${var2}") == "first and second"
    mock_resolver.resolve.assert_has_calls(
        [unittest.mock.call("var1"), unittest.mock.call("var2")]
    )


def test_repeated_variable_resolved_each_time(expander, mock_resolver) -> None:
    mock_resolver.resolve.side_effect = ["1", "2"]
    assert expander.expand("${n}-${n}") == "1-2"


def test_no_variables_untouched(expander, mock_resolver) -> None:
    assert expander.expand("plain $text {braces}") == "plain $text {braces}"
    mock_resolver.resolve.assert_not_called()


def test_nested_substitution(expander, mock_resolver) -> None:
    mock_resolver.resolve.side_effect = ["outer ${inner}", "deep"]
    assert expander.expand("[${outer}]") == "[outer deep]"


def test_unresolved_variable_is_empty(expander, mock_resolver) -> None:
    mock_resolver.resolve.return_value = None
    assert expander.expand("a${missing}b") == "ab"


def test_resolver_chain_precedence() -> None:
    first = Mock()
    first.resolve = Mock(side_effect=lambda name: "first" if name == "x" else None)
    second = Mock()
    second.resolve = Mock(return_value="second")

    expander = VariableExpander(resolvers=[first, second], max_rounds=4)
    assert expander.expand("${x} ${y}") == "first second"
    second.resolve.assert_called_once_with("y")


def test_cycle_raises(expander, mock_resolver) -> None:
    mock_resolver.resolve.return_value = "${loop}"
    with pytest.raises(CyclicExpansion) as exc_info:
        expander.expand("${loop}")
    assert exc_info.value.variable == "loop"
    assert exc_info.value.rounds == 5


def test_many_literal_substitutions_do_not_count(expander, mock_resolver) -> None:
    mock_resolver.resolve.return_value = "x"
    value = " ".join("${v}" for _ in range(100))
    assert expander.expand(value) == " ".join("x" for _ in range(100))


def test_max_rounds_from_settings(monkeypatch) -> None:
    monkeypatch.setattr("borr.lib.expansion.base.appsettings.expansion_maxRounds", 7)
    assert VariableExpander(resolvers=[]).max_rounds == 7


def test_invalid_max_rounds() -> None:
    with pytest.raises(ValueError):
        VariableExpander(resolvers=[], max_rounds=0)


def test_resolver_protocol() -> None:
    class Constant:
        def resolve(self, name: str) -> str | None:
            return "c"

    assert isinstance(Constant(), VariableResolver)
    assert VariableExpander(resolvers=[Constant()]).expand("${a}") == "c"
