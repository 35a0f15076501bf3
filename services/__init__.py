"""
Service layer for Appwrite operations and image downloads.

This module provides abstraction over the Appwrite SDK and external HTTP
calls, separating application logic from infrastructure concerns.
"""
