"""Database repository helpers."""

from repositories.queue_repository import (
    add_ignore,
    dequeue,
    enqueue,
    ensure_queue_schema,
    list_queue,
    load_candidates,
    load_ignore_graph,
    record_match,
)

__all__ = [
    "add_ignore",
    "dequeue",
    "enqueue",
    "ensure_queue_schema",
    "list_queue",
    "load_candidates",
    "load_ignore_graph",
    "record_match",
]
