"""
Shared error types and operation decorators.
"""
