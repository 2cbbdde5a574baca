"""Runtime text-change observation for UI trees."""

from inspectorgadget.core.engine import InspectorGadget
from inspectorgadget.core.records import ChangeRecord, ChangeSource
from inspectorgadget.core.settings import EngineSettings
from inspectorgadget.integration import inspector_gadget

from inspectorgadget.cli import main
