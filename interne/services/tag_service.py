"""Tag service for entry labels and the tag cloud."""

import math
from collections.abc import Iterable

from sqlalchemy import func
from sqlalchemy.orm import Session

from interne.models.entry import Entry, entry_tags
from interne.models.tag import Tag
from interne.models.user import User
from interne.schemas.tag import TagCloudItem

# Tag cloud ranges: font size in rem, HSL from light teal (rare) to deep indigo (frequent)
MIN_FONT_SIZE, MAX_FONT_SIZE = 0.75, 2.5
MIN_HUE, MAX_HUE = 180.0, 260.0
MIN_SATURATION, MAX_SATURATION = 40.0, 60.0
MAX_LIGHTNESS, MIN_LIGHTNESS = 70.0, 35.0


def normalize_tag_names(names: Iterable[str]) -> list[str]:
    """Lower-case and trim tag names, dropping blanks and duplicates."""
    seen: dict[str, None] = {}
    for name in names:
        normalized = name.strip().lower()
        if normalized:
            seen.setdefault(normalized, None)
    return list(seen)


def build_tag_cloud(tag_counts: list[tuple[str, int]]) -> list[TagCloudItem]:
    """Size and colour tags on a log scale of their usage counts."""
    if not tag_counts:
        return []

    counts = [count for _, count in tag_counts]
    log_min, log_max = math.log(min(counts)), math.log(max(counts))

    items = []
    for name, count in tag_counts:
        if log_max == log_min:
            ratio = 0.5
        else:
            ratio = (math.log(count) - log_min) / (log_max - log_min)

        font_size = MIN_FONT_SIZE + ratio * (MAX_FONT_SIZE - MIN_FONT_SIZE)
        hue = MIN_HUE + ratio * (MAX_HUE - MIN_HUE)
        saturation = MIN_SATURATION + ratio * (MAX_SATURATION - MIN_SATURATION)
        lightness = MAX_LIGHTNESS - ratio * (MAX_LIGHTNESS - MIN_LIGHTNESS)

        items.append(
            TagCloudItem(
                name=name,
                count=count,
                font_size=f"{font_size:.2f}rem",
                color=f"hsl({hue:.0f}, {saturation:.0f}%, {lightness:.0f}%)",
            )
        )
    return items


class TagService:
    """Service for tag lookup and aggregation."""

    def __init__(self, db: Session):
        self.db = db

    def resolve_tags(self, names: Iterable[str]) -> list[Tag]:
        """Get tags by name, creating any that do not exist yet."""
        normalized = normalize_tag_names(names)
        if not normalized:
            return []

        existing = {tag.name: tag for tag in self.db.query(Tag).filter(Tag.name.in_(normalized))}
        tags = []
        for name in normalized:
            tag = existing.get(name)
            if tag is None:
                tag = Tag(name=name)
                self.db.add(tag)
            tags.append(tag)
        return tags

    def tag_counts(self, user: User) -> list[tuple[str, int]]:
        """Tags on the user's own entries with how many entries use each."""
        rows = (
            self.db.query(Tag.name, func.count(entry_tags.c.entry_id))
            .join(entry_tags, entry_tags.c.tag_id == Tag.id)
            .join(Entry, Entry.id == entry_tags.c.entry_id)
            .filter(Entry.owner_id == user.id)
            .group_by(Tag.id, Tag.name)
            .order_by(Tag.name)
            .all()
        )
        return [(name, count) for name, count in rows]

    def tag_cloud(self, user: User) -> list[TagCloudItem]:
        """Tag cloud for the user's own entries."""
        return build_tag_cloud(self.tag_counts(user))
