"""
Hierarchy dump for InspectorGadget.
Renders the frontmost surfaces as an indented tree, handy when working out
which elements carry the labels you expect.
"""

import logging
from typing import List

logger = logging.getLogger(__name__)


def dump_hierarchy(platform) -> str:
    """Return every frontmost surface and its descendants as indented text.

    Each node is written as ``<Type>: <label>`` (``nil`` when unlabelled) and
    its accessibility elements follow as ``[Element] <Type>: <label>``.
    """
    lines: List[str] = []

    def walk(node, indent=""):
        label = platform.label_of(node)
        lines.append(f"{indent}{platform.type_name(node)}: {label if label else 'nil'}")
        try:
            elements = platform.accessibility_elements(node)
        except Exception as e:
            logger.debug(f"Error getting accessibility elements: {e}")
            elements = []
        for element in elements:
            element_label = platform.label_of(element)
            if isinstance(element_label, str):
                lines.append(f"{indent}  [Element] {platform.type_name(element)}: {element_label}")
            else:
                lines.append(f"{indent}  [Element] {platform.type_name(element)}: (no label)")
        try:
            children = platform.children(node)
        except Exception as e:
            logger.debug(f"Error getting children: {e}")
            children = []
        for child in children:
            walk(child, indent + "  ")

    for surface in platform.frontmost_surfaces():
        walk(surface)
    return "\n".join(lines)
