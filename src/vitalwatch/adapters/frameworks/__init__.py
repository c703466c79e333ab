"""Framework adapters exposing the engine's read endpoints."""
