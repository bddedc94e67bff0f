"""Domain layer: template entities and services."""
