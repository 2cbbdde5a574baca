"""
Accessibility utilities for InspectorGadget on macOS.
This module wraps the few Accessibility API calls the AppKit platform needs.
"""

import logging

from ApplicationServices import (
    AXIsProcessTrustedWithOptions,
    AXUIElementCopyAttributeValue,
    kAXErrorSuccess,
)

logger = logging.getLogger(__name__)


def check_accessibility_permissions(show_prompt=True):
    """Check whether this process may read other applications' UI.

    Args:
        show_prompt: Whether to display the system permissions prompt if not granted

    Returns:
        bool: True if permissions are granted, False otherwise
    """
    is_trusted = AXIsProcessTrustedWithOptions({"AXTrustedCheckOptionPrompt": bool(show_prompt)})
    if is_trusted:
        logger.debug("Accessibility permissions are granted")
        return True

    logger.warning("Accessibility permissions not granted")
    logger.info("Grant access under System Settings > Privacy & Security > Accessibility "
                "for the terminal running inspectorgadget.")
    return False


def ax_get(element, attribute):
    """Read one attribute from an AXUIElement, or None on any failure."""
    if element is None:
        return None
    try:
        err, value = AXUIElementCopyAttributeValue(element, attribute, None)
    except Exception as e:
        logger.debug(f"Error reading {attribute}: {e}")
        return None
    return value if err == kAXErrorSuccess else None


def clean_label(value):
    """Normalize a value returned by the Accessibility API into a label.

    PyObjC sometimes hands back ``(code, value)`` tuples and null markers
    such as ``"<null>"``; those collapse to an empty string.
    """
    if value is None:
        return ""

    if isinstance(value, tuple):
        if len(value) > 1 and value[1] is not None and value[1] != "<null>":
            return clean_label(value[1])
        if value and not isinstance(value[0], (int, float)):
            return clean_label(value[0])
        return ""

    if isinstance(value, str):
        return value.strip()

    string_val = str(value)
    if string_val == "<null>" or "NULL" in string_val:
        return ""
    return string_val.strip()
