#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Main entry point for InspectorGadget.
This is just a convenience wrapper to run the CLI.
"""

import sys
from inspectorgadget.cli import main

if __name__ == "__main__":
    sys.exit(main())
