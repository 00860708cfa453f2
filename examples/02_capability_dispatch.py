#!/usr/bin/env python3
"""Capability Dispatch: one client, several independently bound strategies.

WHY CAPABILITIES
────────────────
An office device that prints but cannot scan should not be forced to
implement ``scan``.  ``CapabilityDispatcher`` binds a strategy per
capability name, so each device is wired with exactly what it supports
and asking for anything else raises ``CapabilityNotSupportedError``.

ARCHITECTURE
────────────
    CapabilityDispatcher(print=..., scan=...)
        │
        ├── process("print", doc) ──► print_strategy.apply(doc)
        └── process("scan", doc)  ──► scan_strategy.apply(doc)

Run: python examples/02_capability_dispatch.py

See Also:
    01_registry_dispatch: keyed lookup with StrategyRegistry
"""

from switchyard.core.errors import CapabilityNotSupportedError
from switchyard.strategies import CallableStrategy, CapabilityDispatcher


def main():
    print("=" * 60)
    print("Capability Dispatch")
    print("=" * 60)

    print_page = CallableStrategy(lambda doc: f"printed {doc!r}", key="print")
    scan_page = CallableStrategy(lambda doc: f"scanned {doc!r}", key="scan")

    # ── 1. Multi-function device ────────────────────────────────
    print("\n--- 1. Multi-function device ---")
    mfd = CapabilityDispatcher(print=print_page, scan=scan_page)
    print(f"  capabilities: {sorted(mfd.capabilities())}")
    print(f"  {mfd.process('print', 'report.pdf')}")
    print(f"  {mfd.process('scan', 'invoice.png')}")

    # ── 2. Print-only device ────────────────────────────────────
    print("\n--- 2. Print-only device ---")
    printer = CapabilityDispatcher(print=print_page)
    try:
        printer.process("scan", "invoice.png")
    except CapabilityNotSupportedError as e:
        print(f"  {type(e).__name__}: {e}")

    # ── 3. Upgrade by binding ───────────────────────────────────
    print("\n--- 3. Bind a new capability ---")
    printer.bind("scan", scan_page)
    print(f"  {printer.process('scan', 'invoice.png')}")

    print("\n" + "=" * 60)
    print("[OK] Capability dispatch example complete")


if __name__ == "__main__":
    main()
