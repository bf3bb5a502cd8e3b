"""HTTP API (FastAPI) over the dthread services."""
