"""Shared data model for the fare calendar."""
