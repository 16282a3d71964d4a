from .event_log_port import EventLogPort
from .host_port import HostContextPort
from .key_value_port import KeyValueStorePort

__all__ = ["EventLogPort", "HostContextPort", "KeyValueStorePort"]
