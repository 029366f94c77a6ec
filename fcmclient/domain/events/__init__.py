"""Domain Event definitions.

Represents significant occurrences during a send that host code might
react to, delivered through an optional event handler on the client.
"""
