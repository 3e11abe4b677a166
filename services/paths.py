# services/paths.py
import os

_SEPARATORS = {"/", "\\", os.sep, os.altsep} - {None}


def is_single_segment(name) -> bool:
    """True if `name` can only ever resolve to a direct child of its parent directory."""
    if not isinstance(name, str) or not name:
        return False
    if name in (".", "..") or "\x00" in name:
        return False
    return not any(sep in name for sep in _SEPARATORS)
