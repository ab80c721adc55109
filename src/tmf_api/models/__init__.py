"""API-specific request/response models.

Domain models (PaymentMethod, Listener, User) are in tmf_shared.models
and are reused here where appropriate.

Modules:
- common: Shared response wrappers and error models
"""

__all__: list[str] = []
