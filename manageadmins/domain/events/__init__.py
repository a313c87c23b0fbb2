"""Domain Event definitions.

Represents significant occurrences during API calls (initiated, retried,
succeeded, failed) that logging or tests might react to.
"""
