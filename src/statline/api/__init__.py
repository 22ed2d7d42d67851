"""HTTP API for Statline."""
