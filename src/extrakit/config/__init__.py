"""Project configuration: pyproject discovery, models, settings, logging."""
