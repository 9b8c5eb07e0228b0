"""Core: domain, configuration, URL construction and the fetch loop."""
