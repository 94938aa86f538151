"""
Domain layer.

The domain layer contains the core business logic of the welfare modules.
It has no dependencies on external frameworks or infrastructure.
"""
