"""Hypermedia APIs composed from declarative actions and filters."""

from prism.action import CreateItem, DeleteItem, ReadCollection, ReadItem, Root, UpdateItem
from prism.api.plugin import Plugin, PluginOptions
from prism.core.context import Context
from prism.core.document import CollectionDocument, Document, Embedded, Link
from prism.core.filter import Filter
from prism.core.registry import Registry
from prism.core.resource import Relationship, Resource

__all__ = [
    "CollectionDocument",
    "Context",
    "CreateItem",
    "DeleteItem",
    "Document",
    "Embedded",
    "Filter",
    "Link",
    "Plugin",
    "PluginOptions",
    "ReadCollection",
    "ReadItem",
    "Registry",
    "Relationship",
    "Resource",
    "Root",
    "UpdateItem",
]
