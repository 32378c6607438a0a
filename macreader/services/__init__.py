"""MacReader - Services Package

This package contains service modules for the external catalog:
- Google Books query client
- Volume search result parser
- HTTP client abstraction
"""
