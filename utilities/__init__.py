"""Shared helpers for the API process."""
