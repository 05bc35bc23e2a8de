# utils/images.py
"""Keeps the 'exactly one main image' rule for a product's image list.

The database does not enforce it, so every write path goes through these
helpers. They work on any objects with an ``is_main`` attribute (ORM rows or
pydantic models).
"""
from typing import List, Sequence


def normalize_main(images: Sequence) -> List:
    """Leave exactly one main image when the list is not empty.

    The first image flagged main wins; when none is flagged, the first image
    is promoted.
    """
    images = list(images)
    main_seen = False
    for img in images:
        if img.is_main and not main_seen:
            main_seen = True
        else:
            img.is_main = False
    if images and not main_seen:
        images[0].is_main = True
    return images


def remove_image(images: Sequence, target) -> List:
    """Drop ``target`` and promote the first remaining image if it was main."""
    remaining = [img for img in images if img is not target]
    if remaining and not any(img.is_main for img in remaining):
        remaining[0].is_main = True
    return remaining


def set_main_image(images: Sequence, target) -> List:
    images = list(images)
    for img in images:
        img.is_main = img is target
    return images


def new_image_is_main(existing: Sequence) -> bool:
    """An uploaded image becomes main only when the product has none yet."""
    return len(existing) == 0
