"""Core text-change observation engine."""

from inspectorgadget.core.engine import InspectorGadget
from inspectorgadget.core.registry import IdentityRegistry
from inspectorgadget.core.interceptor import TextMutationInterceptor, TextControlTarget
from inspectorgadget.core.poller import AccessibilityPoller
from inspectorgadget.core.overlay import OverlaySurface
from inspectorgadget.core.records import ChangeRecord, ChangeSource
from inspectorgadget.core.reporting import ChangeReporter, format_record
from inspectorgadget.core.settings import EngineSettings
from inspectorgadget.core.hierarchy import dump_hierarchy
