"""Core domain: models, ports, collectors and the engine."""
