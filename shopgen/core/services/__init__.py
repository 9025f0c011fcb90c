"""Application services for image generation."""
