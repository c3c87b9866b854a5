"""Application layer: cache, queries, mutations and pagination."""
