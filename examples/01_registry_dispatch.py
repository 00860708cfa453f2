#!/usr/bin/env python3
"""Registry Dispatch: StrategyRegistry and Dispatcher from a composition root.

WHY A REGISTRY
──────────────
A pricing function that switches on a string tag ("percentage", "fixed",
...) has to be edited for every new discount type, and an unknown tag
ends up in an ``else`` branch nobody tested.  With a registry, adding a
variant is one ``register`` call and an unknown key is a loud
``StrategyNotFoundError``.

ARCHITECTURE
────────────
    main()  (composition root)
      │  construct strategies
      ▼
    StrategyRegistry("pricing")
      ├── "percentage" → PercentageStrategy(0.10)
      ├── "fixed"      → FixedStrategy(15)
      └── .freeze()    ← startup done
      │
      │  resolve(key) per request
      ▼
    Dispatcher(strategy).process(amount)

Run: python examples/01_registry_dispatch.py

See Also:
    02_capability_dispatch: one client, several capabilities
"""

from switchyard.core.errors import InvalidInputError, StrategyNotFoundError
from switchyard.core.logging import configure_logging
from switchyard.strategies import (
    Dispatcher,
    FixedStrategy,
    PercentageStrategy,
    StrategyRegistry,
    register_strategy,
)


def main():
    configure_logging(level="DEBUG", format="console")

    print("=" * 60)
    print("Registry Dispatch")
    print("=" * 60)

    # ── 1. Register strategies ──────────────────────────────────
    print("\n--- 1. Register strategies ---")
    registry = StrategyRegistry("pricing")
    registry.register("percentage", PercentageStrategy(0.10), description="Ten percent off")
    registry.register("fixed", FixedStrategy(15), tags={"team": "billing"})

    @register_strategy("loyalty", registry=registry)
    def loyalty(amount):
        """Five off orders over 50."""
        return 5 if amount > 50 else 0

    for meta in registry.list_with_metadata():
        print(f"  {meta['key']:<12} {meta['type']:<20} {meta['description']}")

    registry.freeze()
    print(f"  {registry!r}")

    # ── 2. Resolve and dispatch ─────────────────────────────────
    print("\n--- 2. Resolve and dispatch ---")
    for key in ["percentage", "fixed", "loyalty"]:
        dispatcher = Dispatcher.from_registry(registry, key)
        print(f"  {key:<12} process(100) = {dispatcher.process(100)}")

    # ── 3. Unknown key ──────────────────────────────────────────
    print("\n--- 3. Unknown key ---")
    try:
        registry.resolve("unknown")
    except StrategyNotFoundError as e:
        print(f"  {type(e).__name__}: {e}")

    # ── 4. Invalid input is the strategy's call ─────────────────
    print("\n--- 4. Invalid input ---")
    strict = Dispatcher(registry.resolve("percentage"))
    try:
        strict.process(-5)
    except InvalidInputError as e:
        print(f"  strict     -> {type(e).__name__}: {e}")
    permissive = Dispatcher(PercentageStrategy(0.10, non_negative=False))
    print(f"  permissive -> process(-5) = {permissive.process(-5)}")

    # ── 5. Rebinding ────────────────────────────────────────────
    print("\n--- 5. Rebinding ---")
    dispatcher = Dispatcher(registry.resolve("percentage"))
    before = dispatcher.process(200)
    dispatcher.bind(registry.resolve("fixed"))
    print(f"  before bind: {before}, after bind: {dispatcher.process(200)}")

    # ── 6. Result envelope ──────────────────────────────────────
    print("\n--- 6. try_process ---")
    for amount in [100, -1]:
        print(f"  try_process({amount}) = {strict.try_process(amount)!r}")

    print("\n" + "=" * 60)
    print("[OK] Registry dispatch example complete")


if __name__ == "__main__":
    main()
