"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (the current date is injectable)

Design Decisions:
    - Functional core separated from imperative shell: routes validate with core,
      then hand validated fields to the repository
"""
