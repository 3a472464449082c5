"""Persistence: key-value store adapters and the lead repository."""
