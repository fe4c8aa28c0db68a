"""
validation.py — User Input Parsing
===================================
Everything the view layer forwards from a form field goes through here
before any algorithm runs.  Each helper either returns a clean Python value
or raises InvalidInput with the message the UI should show.
"""

from typing import Any, List, Optional, Tuple, Union

from engine.errors import InvalidInput

Number = Union[int, float]


def parse_int(raw: Any, field: str = "value") -> int:
    """Accept ints and integer-looking strings; reject bools, floats with a fraction, words."""
    if isinstance(raw, bool):
        raise InvalidInput(f"Please enter a valid {field}", field)
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str):
        text = raw.strip()
        try:
            return int(text)
        except ValueError:
            pass
    raise InvalidInput(f"Please enter a valid {field}", field)


def parse_number(raw: Any, field: str = "value") -> Number:
    """Like parse_int but also keeps genuine floats (array contents may be fractional)."""
    if isinstance(raw, bool):
        raise InvalidInput(f"Please enter a valid {field}", field)
    if isinstance(raw, (int, float)):
        value = raw
    elif isinstance(raw, str):
        try:
            value = float(raw.strip())
        except ValueError:
            raise InvalidInput(f"Please enter a valid {field}", field) from None
    else:
        raise InvalidInput(f"Please enter a valid {field}", field)

    if value != value or value in (float("inf"), float("-inf")):
        raise InvalidInput(f"Please enter a valid {field}", field)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def parse_index(raw: Any, low: int, high: int, field: str = "index") -> int:
    """Parse an integer and require low <= value <= high (inclusive on both ends)."""
    value = parse_int(raw, field)
    if value < low or value > high:
        raise InvalidInput(
            f"{field.capitalize()} out of bounds. Valid range: {low} to {high}", field
        )
    return value


def parse_values(raw: Any, field: str = "values") -> List[Number]:
    """
    Parse "10, 20, 30" (or an already-split list) into numbers.
    An empty string is refused, an empty list is allowed.
    """
    if isinstance(raw, str):
        if not raw.strip():
            raise InvalidInput("Please enter values for the array", field)
        parts: List[Any] = raw.split(",")
    elif isinstance(raw, (list, tuple)):
        parts = list(raw)
    else:
        raise InvalidInput(
            "Invalid input. Please enter numbers separated by commas.", field
        )

    try:
        return [parse_number(p, field) for p in parts]
    except InvalidInput:
        raise InvalidInput(
            "Invalid input. Please enter numbers separated by commas.", field
        ) from None


def parse_vertex(raw: Any, field: str = "vertex") -> str:
    """Vertex labels are case-insensitive and stored upper-case."""
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidInput(f"Please enter a {field} label", field)
    return raw.strip().upper()


def parse_coord(
    raw: Any, rows: int, cols: int, field: str = "cell"
) -> Tuple[int, int]:
    """Accept [row, col] / (row, col) / {"row": r, "col": c} inside a rows×cols grid."""
    row: Optional[Any]
    col: Optional[Any]
    if isinstance(raw, dict):
        row, col = raw.get("row"), raw.get("col")
    elif isinstance(raw, (list, tuple)) and len(raw) == 2:
        row, col = raw
    else:
        raise InvalidInput(f"Please enter a valid {field}", field)
    return (
        parse_index(row, 0, rows - 1, "row"),
        parse_index(col, 0, cols - 1, "col"),
    )
