from .options import LoaderOptions, load_options
from .settings import InitializationResult, Settings
from .vcap_loader import ConfigLoader, initialize

__all__ = [
    "SETTINGS",
    "ConfigLoader",
    "InitializationResult",
    "LoaderOptions",
    "Settings",
    "initialize",
    "load_options",
]

# NOTE: Loading settings at import time gives every importer the same
# snapshot without calling a loader. Code that wants an explicit value can
# call initialize() and pass the result along instead.
SETTINGS = ConfigLoader.load_settings()
