"""HTTP API for the quoting engine."""
