"""Markup parsing into a nested element/text tree."""
from .attributes import parse_attributes
from .nodes import Attribute, Element, Node, Text
from .parser import RAW_TEXT_ELEMENTS, VOID_ELEMENTS, MarkupParser, parse_markup

__all__ = [
    "Attribute",
    "Element",
    "Node",
    "Text",
    "MarkupParser",
    "parse_markup",
    "parse_attributes",
    "VOID_ELEMENTS",
    "RAW_TEXT_ELEMENTS",
]
