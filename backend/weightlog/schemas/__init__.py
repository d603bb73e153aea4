"""API Schemas — Pydantic models validated at the HTTP boundary."""
