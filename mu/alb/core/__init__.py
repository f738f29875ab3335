"""
Core logic package.

Provides the response builders and the request/response conversion strategies.
"""
