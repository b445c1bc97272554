"""
Test Factories Module

Factory functions for service-binding documents, environments and option files.
"""

from .vcap_factories import (
    make_environ,
    make_options_config,
    make_vcap_services,
    temp_config_file,
)

__all__ = [
    "make_environ",
    "make_options_config",
    "make_vcap_services",
    "temp_config_file",
]
