"""Model loading and export helpers."""
