from .relay_dispatcher import RelayDispatcher, TransferReceipt
from .stats import DirectoryStats, collect_stats

__all__ = ["RelayDispatcher", "TransferReceipt", "DirectoryStats", "collect_stats"]
