"""Domain services for the MiniTwit API."""

from . import commands, graph, identity, limits, messages, timeline

__all__ = [
    "commands",
    "graph",
    "identity",
    "limits",
    "messages",
    "timeline",
]
