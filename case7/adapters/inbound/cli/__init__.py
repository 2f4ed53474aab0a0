"""Command line inbound adapter."""
