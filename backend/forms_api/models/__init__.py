"""ORM Models: SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - One file per entity
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from forms_api.models.customer_form import CustomerForm  # noqa: F401
