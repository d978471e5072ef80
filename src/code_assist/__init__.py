"""Code Assist Service.

HTTP API forwarding code-related requests to a text generation service,
with Redis-backed response caching.
"""

__version__ = "0.1.0"
