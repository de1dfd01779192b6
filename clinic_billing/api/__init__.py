"""HTTP API for Clinic Billing."""
