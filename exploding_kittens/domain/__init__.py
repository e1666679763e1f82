"""Domain layer (pure logic).

- Keep game rules and card interpretation here.
- Avoid I/O: no Redis, no HTTP/FastAPI.
- Prefer deterministic functions (random source passed in as an argument).
"""
