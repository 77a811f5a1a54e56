"""Example usage of the DocDiff engine."""

import json
from docdiff import TypeRegistry, Document, DocumentDiffEngine, EngineConfig

# Type definitions: schemas of typed fields, and the document types using them
definitions = {
    "definitions": {
        "lineItem": {
            "type": "complex",
            "fields": {
                "sku": "string",
                "quantity": "long",
                "unitPrice": "double",
            },
        },
    },
    "schemas": {
        "invoice": {
            "number": "string",
            "issuedAt": "date",
            "paid": "boolean",
            "tags": {"type": "list", "items": "string"},
            "customer": {
                "type": "complex",
                "fields": {
                    "name": "string",
                    "email": "string",
                },
            },
            "lineItems": {"type": "list", "items": {"$ref": "#/definitions/lineItem"}},
        },
    },
    "types": {
        "Invoice": ["invoice"],
    },
}

registry = TypeRegistry.from_dict(definitions)

left = Document.from_dict({
    "type": "Invoice",
    "name": "INV-001 v1",
    "path": "/invoices/INV-001",
    "schemas": {
        "invoice": {
            "number": "INV-001",
            "issuedAt": "2025-02-02T10:30:00Z",
            "paid": False,
            "tags": ["priority", "eu"],
            "customer": {"name": "ACME Corp ", "email": "billing@acme.test"},
            "lineItems": [
                {"sku": "A-1", "quantity": 2, "unitPrice": 10},
                {"sku": "B-2", "quantity": 1, "unitPrice": 99.5},
            ],
        },
    },
}, registry)

right = Document.from_dict({
    "type": "Invoice",
    "name": "INV-001 v2",
    "path": "/invoices/INV-001",
    "schemas": {
        "invoice": {
            "number": "INV-001",
            # Same instant, different offset
            "issuedAt": "2025-02-02T11:30:00+01:00",
            "paid": True,
            "tags": ["priority"],
            # Trailing whitespace is not a difference
            "customer": {"name": "ACME Corp", "email": "accounts@acme.test"},
            "lineItems": [
                {"sku": "A-1", "quantity": 3, "unitPrice": 10.0},
                {"sku": "B-2", "quantity": 1, "unitPrice": 99.5},
                {"sku": "C-3", "quantity": 5, "unitPrice": 1.25},
            ],
        },
    },
}, registry)


def main():
    engine = DocumentDiffEngine(EngineConfig(include_system_elements=True))
    doc_diff = engine.diff(left, right)

    print(f"Schemas compared: {doc_diff.schema_count}")
    print(f"Identical: {doc_diff.is_identical()}")

    invoice = doc_diff.get_schema_diff("invoice")
    print(f"Differing fields: {invoice.field_names}")

    line_items = invoice.get_field_diff("lineItems")
    for index in line_items.get_indexes():
        item = line_items.get_diff(index)
        for name in item.get_names():
            member = item.get_diff(name)
            print(f"  lineItems[{index}].{name}: {member.left_value} -> {member.right_value}")

    print("\nFull report:")
    print(json.dumps(doc_diff.to_dict(), indent=2))


if __name__ == "__main__":
    main()
