"""Order Tracker Home Assistant add-on entrypoint"""

from .launcher import LaunchError, LaunchPlan, launch
from .options import AddonOptions, OptionsError, load_options
from .runtime import bootstrap

__version__ = "0.1.0"

__all__ = [
    "AddonOptions",
    "LaunchError",
    "LaunchPlan",
    "OptionsError",
    "bootstrap",
    "launch",
    "load_options",
]
