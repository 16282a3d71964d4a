from . import events, groups, keys, messages, stats

__all__ = ["events", "groups", "keys", "messages", "stats"]
