"""HTTP API and web UI for YC Scout."""
