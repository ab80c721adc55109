"""Resource ID generation."""

import uuid


def generate_resource_id() -> str:
    """Generate a unique resource ID (32 hex characters)."""
    return uuid.uuid4().hex
