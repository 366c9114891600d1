"""Exclusion and priority classification of prep item names.

Items whose name mentions a sauce, condiment or disposable are dropped from
the prep list entirely. Everything else is matched against an ordered rule
table; the first matching rule assigns the item's priority tag.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .models import ClassifiedItem, NormalizedItem, PriorityTag
from .normalizer import merge_key

# Substring matches against the lowercased name, no word boundaries
EXCLUDE_KEYWORDS: tuple[str, ...] = (
    "sauce",
    "packet",
    "packets",
    "dressing",
    "utensil",
    "utensils",
    "napkin",
    "napkins",
    "plate",
    "plates",
    "cup",
    "cups",
    "ice",
    "ketchup",
    "mustard",
    "mayo",
    "mayonnaise",
    "pickle",
    "bbq",
    "barbeque",
    "polynesian",
    "ranch",
    "honey",
    "buffalo",
    "sriracha",
    "vinaigrette",
)


@dataclass(frozen=True)
class PriorityRule:
    """A declarative keyword predicate that assigns a priority tag.

    The rule matches when the name contains every ``include_all`` keyword,
    at least one ``include_any`` keyword (if any are given) and none of
    the ``exclude_any`` keywords.
    """

    tag: PriorityTag
    include_all: tuple[str, ...] = ()
    include_any: tuple[str, ...] = ()
    exclude_any: tuple[str, ...] = ()

    def matches(self, key: str) -> bool:
        if not all(k in key for k in self.include_all):
            return False
        if self.include_any and not any(k in key for k in self.include_any):
            return False
        return not any(k in key for k in self.exclude_any)


# Evaluated top to bottom, first match wins
PRIORITY_RULES: tuple[PriorityRule, ...] = (
    PriorityRule(PriorityTag.SANDWICH, include_any=("sandwich",)),
    PriorityRule(
        PriorityTag.HOT_NUGGET_TRAY,
        include_all=("tray", "nugget", "hot"),
        exclude_any=("cold", "chilled"),
    ),
    PriorityRule(
        PriorityTag.HOT_STRIP_TRAY,
        include_all=("tray", "strip", "hot"),
        exclude_any=("cold", "chilled"),
    ),
    PriorityRule(
        PriorityTag.COLD_NUGGET_TRAY,
        include_all=("tray", "nugget"),
        include_any=("cold", "chilled"),
    ),
    PriorityRule(
        PriorityTag.MAC_TRAY,
        include_all=("tray",),
        include_any=("mac", "macaroni"),
    ),
    PriorityRule(
        PriorityTag.SALAD_TRAY,
        include_all=("tray",),
        include_any=("salad", "cobb", "southwest", "market"),
    ),
    PriorityRule(PriorityTag.WRAP_TRAY, include_all=("tray",), include_any=("wrap",)),
    PriorityRule(PriorityTag.TRAY, include_all=("tray",)),
    PriorityRule(PriorityTag.GRILLED_BUNDLE, include_all=("grilled", "bundle")),
)

UNRANKED = 99

_DISPLAY_RANK: dict[PriorityTag, int] = {
    PriorityTag.SANDWICH: 1,
    PriorityTag.HOT_NUGGET_TRAY: 2,
    PriorityTag.HOT_STRIP_TRAY: 3,
    PriorityTag.COLD_NUGGET_TRAY: 4,
    PriorityTag.MAC_TRAY: 5,
    PriorityTag.SALAD_TRAY: 6,
    PriorityTag.WRAP_TRAY: 7,
    PriorityTag.TRAY: 8,
    PriorityTag.GRILLED_BUNDLE: 9,
}

_LABELS: dict[PriorityTag, str] = {
    PriorityTag.SANDWICH: "Sandwich",
    PriorityTag.HOT_NUGGET_TRAY: "Hot Nugget Tray",
    PriorityTag.HOT_STRIP_TRAY: "Hot Strip Tray",
    PriorityTag.COLD_NUGGET_TRAY: "Cold Nugget Tray",
    PriorityTag.MAC_TRAY: "Mac & Cheese Tray",
    PriorityTag.SALAD_TRAY: "Salad Tray",
    PriorityTag.WRAP_TRAY: "Wrap Tray",
    PriorityTag.TRAY: "Tray",
    PriorityTag.GRILLED_BUNDLE: "Grilled Bundle",
}


def is_excluded(
    name: str, keywords: Iterable[str] = EXCLUDE_KEYWORDS
) -> bool:
    """Check if an item name refers to a sauce, condiment or disposable."""
    key = merge_key(name)
    return any(k in key for k in keywords)


def priority_tag(
    name: str, rules: Iterable[PriorityRule] = PRIORITY_RULES
) -> PriorityTag | None:
    """Return the tag of the first rule matching *name*, or None."""
    key = merge_key(name)
    for rule in rules:
        if rule.matches(key):
            return rule.tag
    return None


def classify(
    name: str,
    exclude_keywords: Iterable[str] = EXCLUDE_KEYWORDS,
    rules: Iterable[PriorityRule] = PRIORITY_RULES,
) -> tuple[bool, PriorityTag | None]:
    """Classify an item name as ``(excluded, priority_tag)``.

    Excluded items never carry a tag.
    """
    if is_excluded(name, exclude_keywords):
        return True, None
    return False, priority_tag(name, rules)


def classify_item(
    item: NormalizedItem,
    exclude_keywords: Iterable[str] = EXCLUDE_KEYWORDS,
) -> ClassifiedItem:
    excluded, tag = classify(item.name, exclude_keywords)
    return ClassifiedItem(
        name=item.name,
        merge_key=item.merge_key,
        quantity=item.quantity,
        excluded=excluded,
        priority_tag=tag,
    )


def display_rank(tag: PriorityTag | None) -> int:
    """Sort rank for a tag; lower sorts first, untagged items rank 99."""
    if tag is None:
        return UNRANKED
    return _DISPLAY_RANK.get(tag, UNRANKED)


def priority_label(tag: PriorityTag | None) -> str:
    if tag is None:
        return "Priority"
    return _LABELS.get(tag, "Priority")
