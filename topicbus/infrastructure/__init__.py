"""Infrastructure Layer - bus implementations built on the domain registry."""
