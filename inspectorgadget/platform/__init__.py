"""Host platform adapters. The AppKit adapter is imported on demand since it needs PyObjC."""

from inspectorgadget.platform.base import MainLoop, Platform, TimerHandle
from inspectorgadget.platform.memory import MemoryPlatform, RunLoop
