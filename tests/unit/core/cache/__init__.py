"""
Unit tests for the cache components.

This package contains unit tests for the core cache components including:
- MessageCache: For efficient message storage and retrieval
- AttachmentCache: For efficient attachment storage and retrieval
"""

__author__ = "Your Name"
__version__ = "0.1.0"
