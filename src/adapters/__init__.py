"""Adapters: concrete I/O (httpx transport, auth, request encoding, exports)."""
