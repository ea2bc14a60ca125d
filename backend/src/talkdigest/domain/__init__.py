"""Domain layer - entities, ports and services independent of adapters."""
