"""Application layer: task host, keep-alive relay, registries and settings."""
