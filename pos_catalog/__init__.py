"""
POS Product Catalog Core

Modules:
    models      - Data models (Attribute, Unit, Variant, Product)
    common      - Shared utilities (errors, config loader, logging, session)
    variants    - Variant expansion engine, SKU codes, stock helpers
    validation  - Product and variant data checks
    storage     - Local JSON store, REST client, persistence adapters
    migration   - Legacy product schema upgrade
"""
