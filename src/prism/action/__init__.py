from prism.action.base import ResourceAction
from prism.action.create_item import CreateItem
from prism.action.delete_item import DeleteItem
from prism.action.read_collection import ReadCollection
from prism.action.read_item import ReadItem
from prism.action.root import Root
from prism.action.update_item import UpdateItem

__all__ = ["CreateItem", "DeleteItem", "ReadCollection", "ReadItem", "ResourceAction", "Root", "UpdateItem"]
