#!/usr/bin/env python3
"""
Route handlers for the DRMtoday license service
"""

import os
import sys

# Add lib path for imports - this will be executed when routes module is imported
script_dir = os.path.dirname(os.path.abspath(__file__))
app_dir = os.path.dirname(script_dir)
LIB_PATH = os.path.join(app_dir, "lib")
if os.path.exists(LIB_PATH) and LIB_PATH not in sys.path:
    sys.path.insert(0, LIB_PATH)

from .drm import setup_drm_routes
from .config import setup_config_routes

__all__ = [
    'setup_drm_routes',
    'setup_config_routes',
]
