"""WebAI HTTP API (FastAPI)."""
