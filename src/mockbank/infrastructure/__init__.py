"""Infrastructure adapters: HTTP transport, banking API, credentials."""
