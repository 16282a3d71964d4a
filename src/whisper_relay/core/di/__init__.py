from .container import Container
from .bootstrap import bootstrap_relay, build_event_log, build_storage, configure_logging

__all__ = ["Container", "bootstrap_relay", "build_event_log", "build_storage", "configure_logging"]
