"""Hashing utilities."""

import hashlib


def generate_article_id(source_system: str, remote_id: int | str) -> str:
    """Generate a stable local article ID from the source system and remote ID."""
    return hashlib.sha256(f"{source_system}:{remote_id}".encode()).hexdigest()[:16]


def generate_author_id(source_system: str, remote_author_id: int | str) -> str:
    """Generate a stable local author ID from the source system and remote author ID."""
    return hashlib.sha256(f"{source_system}:author:{remote_author_id}".encode()).hexdigest()[:16]
