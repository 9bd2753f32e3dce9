"""
In-memory Todo HTTP API.
"""
