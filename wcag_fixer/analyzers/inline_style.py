"""
Inline style - Parsing and editing of style="" declarations.

Only inline declarations are inspected; there is no cascade. Declarations
keep their source order and property names are lowercased.

Usage:
    decls = parse_style("color: #777; background-color:#fff")
    decls["color"]                       # "#777"
    set_declaration(style, "color", "#000000")
"""

from typing import Dict, Optional


def parse_style(style: Optional[str]) -> Dict[str, str]:
    """
    Parse a style attribute into an ordered property → value mapping.

    Semicolons inside parentheses or quotes (e.g. url("a;b")) do not end a
    declaration. Later duplicates win, as in CSS.

    Args:
        style: Raw style attribute value (None is treated as empty)

    Returns:
        Dict of lowercased property names to stripped values
    """
    declarations: Dict[str, str] = {}
    if not style:
        return declarations

    for chunk in _split_declarations(style):
        if ":" not in chunk:
            continue
        prop, value = chunk.split(":", 1)
        prop = prop.strip().lower()
        value = value.strip()
        if prop and value:
            declarations[prop] = value
    return declarations


def serialize_style(declarations: Dict[str, str]) -> str:
    """Render declarations back to a style attribute value."""
    return "; ".join(f"{prop}: {value}" for prop, value in declarations.items()) + (
        ";" if declarations else ""
    )


def get_declaration(style: Optional[str], prop: str) -> Optional[str]:
    """Value of one property, or None when it is not declared."""
    return parse_style(style).get(prop.lower())


def set_declaration(style: Optional[str], prop: str, value: str) -> str:
    """
    Set one property, keeping the position of an existing declaration.

    Returns:
        New style attribute value
    """
    declarations = parse_style(style)
    declarations[prop.lower()] = value
    return serialize_style(declarations)


def hides_element(style: Optional[str]) -> bool:
    """Whether declarations remove the element from rendering."""
    declarations = parse_style(style)
    display = declarations.get("display", "").lower()
    visibility = declarations.get("visibility", "").lower()
    return display.startswith("none") or visibility.startswith("hidden")


def is_transparent(style: Optional[str]) -> bool:
    """Whether declarations make the element fully transparent."""
    opacity = parse_style(style).get("opacity", "").replace("!important", "").strip()
    try:
        return float(opacity) == 0.0
    except ValueError:
        return False


def _split_declarations(style: str):
    depth = 0
    quote = ""
    current = []
    for char in style:
        if quote:
            if char == quote:
                quote = ""
        elif char in ("'", '"'):
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth = max(0, depth - 1)
        elif char == ";" and depth == 0:
            yield "".join(current)
            current = []
            continue
        current.append(char)
    if current:
        yield "".join(current)
