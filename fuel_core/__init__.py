"""Core (UI-agnostic) fuel price dashboard logic.

This package contains:
- record parsing (CSV rows -> typed records)
- filter option extraction, default and normalized selections
- monthly average aggregation (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
