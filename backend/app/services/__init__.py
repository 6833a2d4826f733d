"""Service Layer — persistence workflows and notification orchestration.

Invariants:
    - Routes stay thin: lookups, writes and announcements live here
    - Announcements run only after the triggering write is committed
"""
