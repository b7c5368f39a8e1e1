"""Device API Package - CRUD service for device records.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
