"""Infrastructure layer for Boewatch.

Adapters for HTTP, HTML parsing, geocoding, persistence and logging.
"""
