"""Data stores for persistence.

Stores handle:
- PostgreSQL: engine, DB sessions, table DDL

No business/search logic in stores - that belongs in services.
"""
