"""Authentication and identity-gated notes services."""
