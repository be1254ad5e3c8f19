import json
import re
from typing import Any, Optional, Dict


def extract_json_block(text: str) -> Optional[Dict[str, Any]]:
    """Extract the first valid JSON object from text."""
    if not text:
        return None
    
    start = text.find("{")
    if start == -1:
        return None
    
    depth = 0
    for i in range(start, len(text)):
        ch = text[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                candidate = text[start : i + 1]
                try:
                    return json.loads(candidate)
                except json.JSONDecodeError:
                    try:
                        cleaned = re.sub(r"[\x00-\x1f]", "", candidate)
                        return json.loads(cleaned)
                    except json.JSONDecodeError:
                        return None
    return None

def parse_numeric_value(val: Any) -> Optional[float]:
    """Parse a numeric value from various string formats."""
    if val is None or isinstance(val, bool):
        return None
    try:
        s = str(val).strip().replace(",", "").replace("$", "")
        if s.startswith("(") and s.endswith(")"):
            s = "-" + s[1:-1]
        m = re.match(r"^(-?[\d\.eE+-]+)", s)
        return float(m.group(1)) if m else float(s)
    except (ValueError, TypeError):
        return None


_MAGNITUDES = (
    (1e12, "trillion"),
    (1e9, "billion"),
    (1e6, "million"),
    (1e3, "thousand"),
)

def format_magnitude(value: float) -> str:
    """Render a large number the way claims usually state it, e.g. '1.41 billion'."""
    for threshold, word in _MAGNITUDES:
        if abs(value) >= threshold:
            return f"{value / threshold:.2f} {word}"
    return f"{value:.2f}"
