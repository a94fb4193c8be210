"""Services Layer — IO-bound operations the routes orchestrate.

Invariants:
    - Services receive their session by injection; they never open pools themselves
    - Services receive already-validated input (validation lives in core/)
"""
