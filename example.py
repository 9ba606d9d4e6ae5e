"""Example usage of the jsondelta diff engine."""

import json
from jsondelta import DeltaEngine, EngineConfig, diff, to_jsonable

# Diff configuration: keys mirror the compared documents
config = {
    "ignore_keys": ["etag"],
    "customer": {
        "ignore_missing": True,
    },
    "lineItems": {
        "unique_by": "sku",
        "ignore_keys": ["lastSeen"],
    },
    "tags": {},
}

# Document before the change
before = {
    "id": "INV-001",
    "etag": "W/\"1\"",
    "total": 100.00,
    "status": "pending",
    "customer": {"name": "Ada", "phone": "555-0100"},
    "updatedAt": "2025-02-02T11:00:00Z",
    "tags": ["priority", "eu"],
    "lineItems": [
        {"sku": "WIDGET-001", "quantity": 5, "unitPrice": 10.00, "lastSeen": 1},
        {"sku": "GADGET-002", "quantity": 2, "unitPrice": 25.50, "lastSeen": 1},
    ],
}

# Document after the change
after = {
    "id": "INV-001",
    "etag": "W/\"2\"",
    "total": 112.75,
    "status": "paid",
    "customer": {"name": "Ada"},  # Removal suppressed by ignore_missing
    "updatedAt": "2025-02-03T09:15:00Z",  # Dropped by the global ignore
    "tags": ["eu", "priority"],  # Unpaired: replaced as a whole
    "lineItems": [
        {"sku": "WIDGET-001", "quantity": 5, "unitPrice": 10.00, "lastSeen": 2},
        {"sku": "GADGET-002", "quantity": 3, "unitPrice": 25.50, "lastSeen": 2},
        {"sku": "GIZMO-003", "quantity": 1, "unitPrice": 2.25, "lastSeen": 2},
    ],
}


def main():
    print("=" * 60)
    print("jsondelta - Example")
    print("=" * 60)

    delta = diff(before, after, config)
    print(json.dumps(to_jsonable(delta), indent=2))


def example_with_report():
    """Example that builds a full report with tracing."""
    print("\n" + "=" * 60)
    print("Example with Report and Tracing")
    print("=" * 60)

    engine = DeltaEngine(EngineConfig(
        global_ignores=["$..updatedAt"],
        trace_rule_application=True,
    ))
    result = engine.compare(before, after, config)

    if hasattr(result, 'has_changes'):
        print(f"\nChanged: {result.has_changes}")
        print(f"\nSummary:")
        for name, value in result.summary.to_dict().items():
            print(f"  {name}: {value}")

        if result.trace:
            print(f"\nTraces:")
            for trace in result.trace:
                print(f"  - {trace.path}: {trace.rule} -> {trace.action}")

        print("\n" + "-" * 60)
        print("Full JSON Report:")
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(f"\nError: {result.error['code']}")
        print(f"Message: {result.error['message']}")


if __name__ == "__main__":
    main()
    example_with_report()
