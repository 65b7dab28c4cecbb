"""
Config package for waitlist_admin.

Responsible for:
- the config model (GlobalConfig)
- config I/O (load_global_config)
"""

from .model import GlobalConfig
from .loader import load_global_config
