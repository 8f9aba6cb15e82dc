"""Core data model, error kinds and shared loading/validation helpers."""

from .component import (
    COMPONENT_FIELDS,
    DEFAULT_PRIORITY,
    Component,
    component_from_mapping,
    components_from_mapping,
)
from .config_loading import SUPPORTED_CONFIG_SUFFIXES, load_config_mapping
from .errors import (
    ChainNotBuilt,
    ComponentNotFound,
    CompartmentError,
    CyclicDependency,
    ManifestLoadError,
    UnknownType,
)
from .events import BuildEvent, BuildPhase, EventRecorder, Listener, NotificationHub, Subscription

__all__ = [
    "BuildEvent",
    "BuildPhase",
    "COMPONENT_FIELDS",
    "ChainNotBuilt",
    "Component",
    "ComponentNotFound",
    "CompartmentError",
    "CyclicDependency",
    "DEFAULT_PRIORITY",
    "EventRecorder",
    "Listener",
    "ManifestLoadError",
    "NotificationHub",
    "SUPPORTED_CONFIG_SUFFIXES",
    "Subscription",
    "UnknownType",
    "component_from_mapping",
    "components_from_mapping",
    "load_config_mapping",
]
