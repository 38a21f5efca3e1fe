"""
Shared infrastructure: configuration, logging, exceptions and data schemas.
"""
