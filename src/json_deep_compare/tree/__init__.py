"""Tree subpackage for path addressing and value classification.

Re-exports the public API for the tree module:
- ValueKind: StrEnum of the six value shapes the engine dispatches on
- classify / type_tag / unwrap: value classification helpers
- MISSING: sentinel returned by value_at for unresolvable paths
- all_paths / value_at / key_name_of / append_*: path addressing
"""

from json_deep_compare.tree.kinds import ValueKind, classify, is_container, type_tag, unwrap
from json_deep_compare.tree.paths import (
    MISSING,
    Segment,
    SegmentKind,
    all_paths,
    append_index,
    append_key,
    append_keyed,
    key_name_of,
    split_path,
    stringify_key,
    value_at,
)

__all__ = [
    "MISSING",
    "Segment",
    "SegmentKind",
    "ValueKind",
    "all_paths",
    "append_index",
    "append_key",
    "append_keyed",
    "classify",
    "is_container",
    "key_name_of",
    "split_path",
    "stringify_key",
    "type_tag",
    "unwrap",
    "value_at",
]
