"""Services Layer - imperative shell around the pure device rules.

Invariants:
    - Services orchestrate IO (repository calls) around core/ rule checks
    - Services raise DeviceApiError subclasses; routes never translate errors
"""
