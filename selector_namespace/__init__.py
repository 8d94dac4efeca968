"""selector-namespace - Scope every rule of a stylesheet under a namespace selector."""

from selector_namespace.config import ConfigurationError, NamespaceConfig, ProcessResult
from selector_namespace.pipeline import Processor, process_files, transform
from selector_namespace.plugin import SelectorNamespacePlugin, selector_namespace

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "NamespaceConfig",
    "ProcessResult",
    "Processor",
    "SelectorNamespacePlugin",
    "process_files",
    "selector_namespace",
    "transform",
]
