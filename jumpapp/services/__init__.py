"""Window resolution, selection and launch services."""
