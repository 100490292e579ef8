"""HTTP API for bulk email validation uploads."""
