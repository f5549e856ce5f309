"""API Layer: request validation, route composition, responders and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints answer with the {success, message, data?} envelope
"""
