"""Infrastructure Layer — database sessions, outbound channels, logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All transport failures mapped to typed errors (core/errors.py)

Design Decisions:
    - Process-wide clients created once at startup and handed out via FastAPI dependencies
"""
