"""Pure scoring and decisioning engine."""
