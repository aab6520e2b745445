"""Tests for flags — typed parsers and the flag registry."""

import pytest

from region_batch.errors import DuplicateFlagError, InvalidFlagValue, UnknownFlag
from region_batch.flags import (
    BooleanFlag,
    DoubleFlag,
    FlagContext,
    FlagRegistry,
    IntegerFlag,
    SetFlag,
    State,
    StateFlag,
    StringFlag,
    default_registry,
)
from region_batch.regions import Region

from conftest import STEVE


@pytest.fixture
def context():
    return FlagContext(actor=STEVE, region=Region("town"), raw_input="", world="world")


class TestStateFlag:
    @pytest.mark.parametrize("raw,expected", [("allow", State.ALLOW), ("DENY", State.DENY), (" allow ", State.ALLOW)])
    def test_parse(self, context, raw, expected):
        assert StateFlag("pvp").parse(raw, context) == expected

    def test_none_clears(self, context):
        assert StateFlag("pvp").parse("none", context) is None

    def test_invalid(self, context):
        with pytest.raises(InvalidFlagValue, match="allow/deny"):
            StateFlag("pvp").parse("maybe", context)

    @pytest.mark.parametrize("raw", ["", "   "])
    def test_empty_input_is_invalid(self, context, raw):
        with pytest.raises(InvalidFlagValue):
            StateFlag("pvp").parse(raw, context)


class TestScalarFlags:
    def test_boolean(self, context):
        flag = BooleanFlag("buyable")
        assert flag.parse("yes", context) is True
        assert flag.parse("Off", context) is False
        with pytest.raises(InvalidFlagValue):
            flag.parse("perhaps", context)

    def test_integer(self, context):
        assert IntegerFlag("heal-amount").parse(" 4 ", context) == 4
        with pytest.raises(InvalidFlagValue, match="whole number"):
            IntegerFlag("heal-amount").parse("4.5", context)

    def test_double(self, context):
        assert DoubleFlag("price").parse("12.5", context) == 12.5
        with pytest.raises(InvalidFlagValue):
            DoubleFlag("price").parse("cheap", context)
        with pytest.raises(InvalidFlagValue, match="finite"):
            DoubleFlag("price").parse("nan", context)

    def test_string_keeps_text_and_expands_newlines(self, context):
        flag = StringFlag("greeting")
        assert flag.parse("Welcome to town!", context) == "Welcome to town!"
        assert flag.parse(r"line one\nline two", context) == "line one\nline two"

    def test_set(self, context):
        flag = SetFlag("blocked-cmds", StringFlag("command"))
        assert flag.parse("/home, /spawn,,/tp", context) == frozenset({"/home", "/spawn", "/tp"})

    def test_set_propagates_item_errors(self, context):
        flag = SetFlag("delays", IntegerFlag("delay"))
        with pytest.raises(InvalidFlagValue):
            flag.parse("1, two", context)

    def test_invalid_name(self):
        with pytest.raises(ValueError):
            StateFlag("no spaces allowed")


class TestFlagRegistry:
    def test_exact_lookup(self, registry):
        assert registry.lookup("pvp").name == "pvp"

    @pytest.mark.parametrize("typed", ["heal-amount", "HEAL-AMOUNT", "healamount", "heal_amount", "HealAmount"])
    def test_fuzzy_lookup(self, registry, typed):
        assert registry.lookup(typed).name == "heal-amount"

    def test_unknown_flag(self, registry):
        with pytest.raises(UnknownFlag, match="nope"):
            registry.lookup("nope")

    def test_duplicate_registration(self):
        registry = FlagRegistry([StateFlag("pvp")])
        with pytest.raises(DuplicateFlagError):
            registry.register(BooleanFlag("PVP"))

    def test_default_registry_is_fresh(self):
        first = default_registry()
        first.register(StateFlag("custom-flag"))
        assert "custom-flag" in first
        assert "custom-flag" not in default_registry()

    def test_default_registry_types(self, registry):
        assert isinstance(registry.lookup("build"), StateFlag)
        assert isinstance(registry.lookup("greeting"), StringFlag)
        assert isinstance(registry.lookup("price"), DoubleFlag)
        assert len(registry) == len(registry.names())
