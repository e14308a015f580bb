"""
Content service.

Manages user-authored publications and the threaded comments attached
to them, including image attachments and hashtag extraction.
"""

__version__ = "1.0.0"
