import math
import re
from typing import Any, List, Optional

_LEADING_NUMBER = re.compile(r"^-?\d+(?:\.\d+)?")


def as_text(x: Any) -> str:
    if x is None:
        return ""
    if isinstance(x, list):
        # join list of sentences or tokens into one paragraph
        return " ".join([str(t).strip() for t in x if t is not None and str(t).strip()])
    return str(x).strip()


def as_list(x: Any, split: bool = True) -> List[str]:
    if x is None:
        return []
    if isinstance(x, str):
        if not split:
            return [x.strip()] if x.strip() else []
        # split on commas/semicolons; normalize tokens
        parts = [p.strip() for p in x.replace(";", ",").split(",")]
        return [p for p in parts if p]
    if isinstance(x, (list, tuple)):
        return [str(t).strip() for t in x if t is not None and str(t).strip()]
    return []


def as_float(x: Any) -> Optional[float]:
    """Best-effort number coercion; None when nothing numeric is found."""
    if isinstance(x, bool) or x is None:
        return None
    if isinstance(x, (int, float)):
        # json.loads lets NaN and Infinity through
        return float(x) if math.isfinite(x) else None
    if isinstance(x, list):
        # sometimes model returns ["6"]; take first
        return as_float(x[0]) if x else None
    if isinstance(x, str):
        m = _LEADING_NUMBER.match(x.strip())
        return float(m.group(0)) if m else None
    return None


def strip_json_fences(s: str) -> str:
    """Cut the outermost {...} out of a model reply (drops ``` fences and prose)."""
    start = s.find("{")
    end = s.rfind("}")
    if start < 0 or end < start:
        return ""
    return s[start:end + 1]
