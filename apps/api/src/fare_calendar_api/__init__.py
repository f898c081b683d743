"""HTTP API for the fare calendar."""
