"""Deep merge of media manifest values.

Rules, applied recursively:
  - list + list  → ``a + b`` (ancestor entries first, duplicates kept)
  - dict + dict  → keys from both sides; shared keys merged recursively
  - anything else (scalars, list vs dict) → ``b`` wins

The result shares no lists or dicts with either argument, so neither
argument is mutated through it.
"""

import copy
from typing import Any


def deep_merge(a: Any, b: Any) -> Any:
    """Overlay *b* (the more-derived value) on top of *a*.

    Example::

        deep_merge({"all": ["base.css"]}, {"all": ["form.css"], "print": ["p.css"]})
        # {"all": ["base.css", "form.css"], "print": ["p.css"]}
    """
    if isinstance(a, list) and isinstance(b, list):
        return copy.deepcopy(a) + copy.deepcopy(b)

    if isinstance(a, dict) and isinstance(b, dict):
        merged = {key: copy.deepcopy(value) for key, value in a.items()}
        for key, value in b.items():
            merged[key] = deep_merge(a[key], value) if key in a else copy.deepcopy(value)
        return merged

    return copy.deepcopy(b)
