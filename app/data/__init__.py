"""
Data access layer.

Design rules:
- Views call ONLY controllers, the store, and helpers in this package.
- All store calls are wrapped so a failed load falls back to sample data
  and a failed mutation leaves local state untouched.
- No env var reads here (config-only).
"""
