"""Services for rivalry pairing and standings."""
