"""
Feedwatch

A FastAPI RSS reader: submit feed URLs, poll them for new posts,
and render feed/post lists with read/unread tracking.
"""

__version__ = "1.0.0"
