"""Domain core: models, ports and services."""
