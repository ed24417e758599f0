"""HTTP API for the caption cleaner (FastAPI)."""
