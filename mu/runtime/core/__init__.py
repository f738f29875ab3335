"""
Core logic package.

Provides the error taxonomy, handler introspection and the Runtime API
header handling.
"""
