"""Domain layer: extra names and the default-extras selector.

This layer depends only on stdlib and pydantic.
It must never import from config or codec.
"""
