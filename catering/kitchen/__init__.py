"""Kitchen prep aggregation for catering orders."""

from .aggregator import aggregate, sort_others, sort_priority, sum_quantity
from .board import PrepBoard, TimelineBucket, WeekDay, WeekView
from .classifier import (
    EXCLUDE_KEYWORDS,
    PRIORITY_RULES,
    PriorityRule,
    classify,
    display_rank,
    is_excluded,
    priority_label,
    priority_tag,
)
from .config import CateringConfig, load_config
from .models import (
    AggregatedItem,
    ClassifiedItem,
    LineItem,
    NormalizedItem,
    Order,
    PrepList,
    PriorityTag,
    ServiceBucket,
)
from .normalizer import as_order, item_count, merge_key, normalize_items
from .schedule import (
    bucket_of,
    day_key_of,
    group_by_bucket,
    group_by_day,
    orders_for_day,
    scheduled_at,
    sort_time_of,
)

__all__ = [
    "Order",
    "LineItem",
    "NormalizedItem",
    "ClassifiedItem",
    "AggregatedItem",
    "PrepList",
    "PriorityTag",
    "ServiceBucket",
    "as_order",
    "merge_key",
    "normalize_items",
    "item_count",
    "EXCLUDE_KEYWORDS",
    "PRIORITY_RULES",
    "PriorityRule",
    "classify",
    "is_excluded",
    "priority_tag",
    "display_rank",
    "priority_label",
    "aggregate",
    "sort_priority",
    "sort_others",
    "sum_quantity",
    "day_key_of",
    "sort_time_of",
    "scheduled_at",
    "bucket_of",
    "orders_for_day",
    "group_by_bucket",
    "group_by_day",
    "PrepBoard",
    "TimelineBucket",
    "WeekView",
    "WeekDay",
    "CateringConfig",
    "load_config",
]
