"""
Infrastructure layer - External storage backends.

Blob storage for publication images.
"""
