"""Image model adapters."""
