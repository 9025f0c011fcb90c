"""Domain Event definitions.

Represents significant occurrences during outbound API calls (deferrals,
retries, failures) that other parts of the system might react to.
"""
