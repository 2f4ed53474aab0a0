"""Application layer: transport-agnostic tool operations."""
