"""Core of the client: domain, extraction engine, fetch pipeline."""
