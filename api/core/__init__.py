"""
Shared, cross-cutting code for the gateway.

`core/` holds small building blocks that features share (DB wiring,
the upstream SWAPI client, settings, concurrency helpers). Keep
feature-specific SQL and business logic in the feature package
(e.g. `persons/`, `analytics/`).
"""
