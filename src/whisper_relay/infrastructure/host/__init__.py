from .in_process_host import InProcessHost

__all__ = ["InProcessHost"]
