"""API Resilience Implementations.

Contains the request executor that retries rate-limited calls using the
server-provided Retry-After delay.
Bounded Context: API Resilience
"""
