"""Services Layer: business operations that return ServiceResponse values.

Invariants:
    - Services receive their repository; they never open sessions themselves
"""
