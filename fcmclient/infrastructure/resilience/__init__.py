"""API Resilience Support.

Tracks the server-advised retry hint (Retry-After). Acting on the hint is
left to the caller; nothing here re-sends requests.
Bounded Context: API Resilience
"""
