from typing import Protocol

from prism.core.query import Collection, Create, Delete, Item, Read, Update


class Source(Protocol):
    async def create(self, query: Create) -> Item: ...

    async def read(self, query: Read) -> Item | Collection: ...

    async def update(self, query: Update) -> Item: ...

    async def delete(self, query: Delete) -> bool: ...
