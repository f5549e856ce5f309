"""Core Layer: outcome types, domain types, errors and boundary protocols.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - No IO: repositories are described here and implemented in infrastructure/
"""
