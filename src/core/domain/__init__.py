"""Domain models and entities.

Why:
- Pure, strict data structures (Pydantic v2) live here.
- The domain knows nothing about HTTP, the CLI or SDKs: only the concepts of
  the problem (posts, accounts, pages, resource kinds).
"""
