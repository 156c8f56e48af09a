"""Infrastructure adapters: reference workloads and the HTTP host client."""
