"""notegraph: link and tag statistics over a vault of markdown notes."""

__version__ = "0.1.0"

from notegraph.environment import Environment
from notegraph.errors import (
    LinkTargetMissingError,
    NameCollisionError,
    NotegraphError,
    NoteNotFoundError,
    NotLinkedError,
)
from notegraph.graph import LinkGraph
from notegraph.index import VaultIndex
from notegraph.navigator import Navigator, Neighborhood
from notegraph.note import Note
from notegraph.parser import extract_note, parse_note
from notegraph.query import Query, filter_notes, parse_query
from notegraph.stats import EnvironmentStats, compute

__all__ = [
    "Environment",
    "EnvironmentStats",
    "LinkGraph",
    "LinkTargetMissingError",
    "NameCollisionError",
    "Navigator",
    "Neighborhood",
    "Note",
    "NoteNotFoundError",
    "NotegraphError",
    "NotLinkedError",
    "Query",
    "VaultIndex",
    "compute",
    "extract_note",
    "filter_notes",
    "parse_note",
    "parse_query",
]
