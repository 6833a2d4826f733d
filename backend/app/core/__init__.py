"""Core Layer — pure domain logic: types, errors, message formatting, contact selection.

Invariants:
    - No IO: nothing here imports SQLAlchemy, FastAPI, httpx or aiosmtplib
"""
