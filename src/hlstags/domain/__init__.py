"""Domain layer — value kinds, tokenizer, schemas, and tag variants.

This layer depends only on stdlib and pydantic.
It must never import from services or config.
"""
