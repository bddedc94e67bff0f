"""HTTP surface over the template services."""
