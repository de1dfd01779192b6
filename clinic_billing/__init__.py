"""Clinic Billing: appointment lifecycle and bill calculation service."""

__version__ = "0.1.0"
