"""HTTP API over the lease engine."""
