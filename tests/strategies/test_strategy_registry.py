"""Tests for StrategyRegistry, the default registry and register_strategy."""

from enum import Enum

import pytest
import structlog

from switchyard.core.errors import (
    DuplicateStrategyError,
    InvalidStrategyError,
    MissingStrategyError,
    RegistryFrozenError,
    StrategyNotFoundError,
)
from switchyard.strategies.base import CallableStrategy, Strategy
from switchyard.strategies.builtin import FixedStrategy, PercentageStrategy
from switchyard.strategies.registry import (
    StrategyRegistry,
    get_default_registry,
    register_strategy,
    reset_default_registry,
)


class Discount(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class TestRegisterAndResolve:
    def test_resolve_returns_registered_instance(self, registry, percentage, fixed):
        assert registry.resolve("percentage") is percentage
        assert registry.resolve("fixed") is fixed

    def test_resolve_unknown_raises_not_found(self, registry):
        with pytest.raises(StrategyNotFoundError) as exc_info:
            registry.resolve("unknown")
        error = exc_info.value
        assert error.key == "unknown"
        assert error.available == ["fixed", "percentage"]
        assert error.context.registry == "test"

    def test_resolve_on_empty_registry(self):
        with pytest.raises(StrategyNotFoundError, match="Available: none"):
            StrategyRegistry().resolve("percentage")

    def test_resolve_unhashable_key_is_not_found(self, registry):
        with pytest.raises(StrategyNotFoundError):
            registry.resolve(["percentage"])

    def test_reregister_overwrites(self, registry):
        replacement = FixedStrategy(20)
        registry.register("fixed", replacement)
        assert registry.resolve("fixed") is replacement
        assert len(registry) == 2

    def test_reregister_same_strategy_is_safe(self, registry, fixed):
        registry.register("fixed", fixed)
        registry.register("fixed", fixed)
        assert registry.resolve("fixed") is fixed

    def test_keys_snapshot(self, registry):
        keys = registry.keys()
        assert keys == {"percentage", "fixed"}
        registry.register("extra", FixedStrategy(1))
        assert "extra" not in keys

    def test_keys_match_exactly(self, registry):
        assert not registry.has("Percentage")
        with pytest.raises(StrategyNotFoundError):
            registry.resolve("PERCENTAGE")

    def test_enum_keys(self):
        reg = StrategyRegistry()
        reg.register(Discount.PERCENTAGE, PercentageStrategy(0.1))
        assert reg.resolve(Discount.PERCENTAGE).apply(100) == 10.0
        assert Discount.PERCENTAGE in reg

    def test_shared_strategy_across_keys(self, percentage):
        reg = StrategyRegistry()
        reg.register("a", percentage)
        reg.register("b", percentage)
        assert reg.resolve("a") is reg.resolve("b")


class TestRegisterValidation:
    def test_none_strategy(self):
        with pytest.raises(MissingStrategyError):
            StrategyRegistry().register("x", None)

    def test_object_without_apply(self):
        with pytest.raises(InvalidStrategyError):
            StrategyRegistry().register("x", object())

    @pytest.mark.parametrize("key", ["", 3, None, ("a",)])
    def test_invalid_keys(self, key):
        with pytest.raises(TypeError):
            StrategyRegistry().register(key, FixedStrategy(1))

    def test_failed_register_leaves_registry_unchanged(self, registry, fixed):
        with pytest.raises(MissingStrategyError):
            registry.register("fixed", None)
        assert registry.resolve("fixed") is fixed


class TestOverwritePolicy:
    def test_strict_registry_rejects_duplicates(self, fixed):
        reg = StrategyRegistry("strict", allow_overwrite=False)
        reg.register("fixed", fixed)
        with pytest.raises(DuplicateStrategyError) as exc_info:
            reg.register("fixed", FixedStrategy(99))
        assert exc_info.value.context.registry == "strict"
        assert reg.resolve("fixed") is fixed

    def test_policy_default_from_settings(self, monkeypatch):
        monkeypatch.setenv("SWITCHYARD_ALLOW_OVERWRITE", "false")
        assert StrategyRegistry().allow_overwrite is False

    def test_explicit_argument_beats_settings(self, monkeypatch):
        monkeypatch.setenv("SWITCHYARD_ALLOW_OVERWRITE", "false")
        assert StrategyRegistry(allow_overwrite=True).allow_overwrite is True


class TestIntrospection:
    def test_has_and_contains(self, registry):
        assert registry.has("fixed")
        assert "fixed" in registry
        assert "nope" not in registry
        assert [] not in registry

    def test_metadata(self):
        reg = StrategyRegistry()
        reg.register("fixed", FixedStrategy(15), description="Flat fee", tags={"team": "billing"})
        meta = reg.get_metadata("fixed")
        assert meta["type"] == "FixedStrategy"
        assert meta["description"] == "Flat fee"
        assert meta["tags"] == {"team": "billing"}

    def test_metadata_description_defaults_to_docstring(self, registry):
        assert registry.get_metadata("fixed")["description"].startswith("Return ``amount``")

    def test_metadata_missing(self, registry):
        assert registry.get_metadata("nope") is None

    def test_unhashable_key_is_absent_everywhere(self, registry):
        """Lookups with an unhashable key answer 'absent' instead of raising TypeError."""
        assert registry.get_metadata([]) is None
        assert registry.unregister({}) is False
        assert len(registry) == 2

    def test_list_with_metadata_sorted(self, registry):
        assert [m["key"] for m in registry.list_with_metadata()] == ["fixed", "percentage"]

    def test_unregister(self, registry):
        assert registry.unregister("fixed") is True
        assert registry.unregister("fixed") is False
        with pytest.raises(StrategyNotFoundError):
            registry.resolve("fixed")

    def test_clear(self, registry):
        registry.clear()
        assert len(registry) == 0
        assert registry.keys() == frozenset()

    def test_repr(self, registry):
        assert repr(registry) == "StrategyRegistry(name='test', strategies=2, frozen=False)"


class TestFreeze:
    def test_resolve_still_works(self, registry, fixed):
        registry.freeze()
        assert registry.frozen
        assert registry.resolve("fixed") is fixed

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda r: r.register("new", FixedStrategy(1)),
            lambda r: r.unregister("fixed"),
            lambda r: r.clear(),
        ],
    )
    def test_mutations_rejected(self, registry, mutate):
        registry.freeze()
        with pytest.raises(RegistryFrozenError):
            mutate(registry)
        assert registry.keys() == {"percentage", "fixed"}

    def test_freeze_is_idempotent(self, registry):
        registry.freeze()
        registry.freeze()
        assert registry.frozen


class TestLogging:
    def test_register_and_overwrite_events(self, fixed):
        reg = StrategyRegistry("pricing")
        with structlog.testing.capture_logs() as logs:
            reg.register("fixed", fixed)
            reg.register("fixed", FixedStrategy(20))
        assert [e["event"] for e in logs] == ["strategy.registered", "strategy.overwritten"]
        assert logs[0]["registry"] == "pricing"
        assert logs[0]["key"] == "fixed"
        assert logs[0]["log_level"] == "debug"

    def test_resolve_failure_is_not_logged(self, registry):
        with structlog.testing.capture_logs() as logs:
            with pytest.raises(StrategyNotFoundError):
                registry.resolve("unknown")
        assert logs == []


class TestDefaultRegistry:
    def test_singleton(self):
        assert get_default_registry() is get_default_registry()

    def test_reset(self):
        first = get_default_registry()
        reset_default_registry()
        assert get_default_registry() is not first


class TestRegisterStrategyDecorator:
    def test_function_registered_as_callable_strategy(self):
        reg = StrategyRegistry()

        @register_strategy("double", registry=reg)
        def double(value):
            """Double the value."""
            return value * 2

        strategy = reg.resolve("double")
        assert isinstance(strategy, CallableStrategy)
        assert strategy.apply(4) == 8
        assert double(2) == 4
        assert reg.get_metadata("double")["description"] == "Double the value."

    def test_class_instantiated_with_params(self):
        reg = StrategyRegistry()

        @register_strategy("scaled", registry=reg, factor=3)
        class Scaled(Strategy):
            def __init__(self, factor):
                self.factor = factor

            def apply(self, value):
                return value * self.factor

        assert isinstance(reg.resolve("scaled"), Scaled)
        assert reg.resolve("scaled").apply(2) == 6

    def test_empty_explicit_registry_is_honoured(self):
        """An empty registry is falsy but must still receive the registration."""
        reg = StrategyRegistry("explicit")
        assert len(reg) == 0

        @register_strategy("double", registry=reg)
        def double(value):
            return value * 2

        assert "double" in reg
        assert reg.resolve("double").apply(3) == 6
        assert len(get_default_registry()) == 0

    def test_uses_default_registry(self):
        @register_strategy("noop")
        def noop(value):
            return value

        assert get_default_registry().resolve("noop").apply(7) == 7

    def test_non_strategy_class_rejected(self):
        with pytest.raises(TypeError):

            @register_strategy("bad", registry=StrategyRegistry())
            class NotAStrategy:
                pass

    def test_params_on_function_rejected(self):
        with pytest.raises(TypeError):

            @register_strategy("bad", registry=StrategyRegistry(), rate=0.1)
            def bad(value):
                return value
