"""
Engine settings for InspectorGadget.
"""

import logging
from typing import Optional

from pydantic import BaseModel, Field

from inspectorgadget.core.reporting import DEFAULT_PREFIX


class EngineSettings(BaseModel):
    poll_interval_ms: int = Field(500, gt=0, description="Milliseconds between accessibility walks")
    intercept: bool = Field(True, description="Hook text setters of the platform's text controls")
    poll: bool = Field(True, description="Run the accessibility poller")
    output_file: Optional[str] = Field(None, description="Append change records as JSON lines")
    log_level: int = logging.INFO
    prefix: str = DEFAULT_PREFIX
