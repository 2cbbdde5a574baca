"""
Integration hook for InspectorGadget.
One call wires the engine to start when the host's root view first appears.
"""


def inspector_gadget(root_view, engine):
    """Start ``engine`` when ``root_view`` first becomes visible.

    Returns ``root_view`` so the call can wrap a view where it is built.
    """
    root_view.on_appear(engine.start)
    return root_view
