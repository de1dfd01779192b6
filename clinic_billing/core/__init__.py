"""Errors, storage and service wiring."""
