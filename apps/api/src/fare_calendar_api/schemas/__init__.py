"""Wire schemas for the HTTP API."""
