"""
Flatten catechism rich-text paragraphs into plain strings.

A paragraph node looks like::

    {"elements": [
        {"type": "text", "text": "In "},
        {"type": "ref", "number": "3"},
        {"type": "text", "text": " the beginning"},
    ]}

and flattens to ``"In [3] the beginning"``. Extraction never raises:
anything malformed contributes an empty string.
"""

from dataclasses import dataclass
from typing import Any, Optional, Union

TEXT_ELEMENT = "text"
REF_ELEMENT = "ref"


@dataclass(frozen=True)
class TextSpan:
    text: str


@dataclass(frozen=True)
class RefMarker:
    number: str


Element = Union[TextSpan, RefMarker]


def format_ref_number(number: Any) -> str:
    """
    Render a reference number the way it is shown between brackets.

    Missing, empty, zero and NaN numbers render as "". Whole floats drop
    the fractional part (2.0 -> "2"). Containers and bools render as "".
    """
    if number is None or isinstance(number, (bool, dict, list)):
        return ""
    if isinstance(number, float):
        if number != number or number == 0:
            return ""
        return str(int(number)) if number.is_integer() else str(number)
    if isinstance(number, int):
        return str(number) if number else ""
    return str(number)


def parse_element(raw: Any) -> Optional[Element]:
    """Type one raw element, or return None when it is not recognisable."""
    if not isinstance(raw, dict):
        return None

    element_type = raw.get("type")
    if element_type == TEXT_ELEMENT:
        text = raw.get("text")
        return TextSpan(text if isinstance(text, str) else "")
    if element_type == REF_ELEMENT:
        return RefMarker(format_ref_number(raw.get("number")))
    return None


def render_element(element: Optional[Element]) -> str:
    if isinstance(element, TextSpan):
        return element.text
    if isinstance(element, RefMarker):
        return f"[{element.number}]"
    return ""


def extract_text(node: Any) -> str:
    """
    Concatenate a paragraph node's elements into one trimmed string.

    Args:
        node: Mapping with an ``elements`` list (anything else yields "").

    Returns:
        Text spans verbatim, reference markers as ``[<number>]``,
        surrounding whitespace stripped.
    """
    if not isinstance(node, dict):
        return ""
    elements = node.get("elements")
    if not isinstance(elements, list):
        return ""
    return "".join(render_element(parse_element(raw)) for raw in elements).strip()
