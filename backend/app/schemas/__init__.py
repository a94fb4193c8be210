"""Pydantic Schemas — request/response shapes for API endpoints.

Invariants:
    - Schemas enforce TYPES only; business rules live in core/enforce_employee.py
      so the first failing rule, in a fixed order, decides the error message
"""
