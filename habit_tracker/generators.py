"""Generators for new entity ids and display colors."""

import random
import uuid


def generate_pastel_color() -> str:
    """Return a random pastel color as a CSS hsl() token."""
    hue = random.randrange(360)
    return f"hsl({hue}, 70%, 80%)"


def generate_id() -> str:
    """Return a new opaque, globally unique id."""
    return uuid.uuid4().hex
