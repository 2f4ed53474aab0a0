"""Outbound adapters: case source, embeddings and vector indexes."""
