from typing import Any, Iterator, Mapping
from structlog import get_logger

from ._models import CollectionSummary
from .collection import Collection, Record
from .exceptions import CollectionNotFound

log = get_logger()


class Database:
    """
    A set of named collections, standing in for a database full of tables.

    Collections are available by key (``db["users"]``) or as attributes
    (``db.users``).
    """

    def __init__(self, initial_data: Mapping[str, Any] | None = None):
        self.collections: dict[str, Collection] = {}
        if initial_data:
            self.load_data(initial_data)

    def __repr__(self) -> str:
        return f"Database({', '.join(self.collections)})"

    def __getitem__(self, name: str) -> Collection:
        try:
            return self.collections[name]
        except KeyError:
            raise CollectionNotFound(f"{name} not found in database")

    def __getattr__(self, name: str) -> Collection:
        # only called when normal lookup fails
        if name.startswith("_") or name == "collections":
            raise AttributeError(name)
        try:
            return self[name]
        except CollectionNotFound as e:
            raise AttributeError(str(e)) from e

    def __contains__(self, name: object) -> bool:
        return name in self.collections

    def __iter__(self) -> Iterator[str]:
        return iter(self.collections)

    def __len__(self) -> int:
        return len(self.collections)

    # section: collections ####################################################

    def create_collection(self, name: str, initial_data=None) -> Collection:
        """
        Create a collection, seeded with ``initial_data`` if given.

        If the collection already exists, ``initial_data`` is inserted into it.
        """
        if name not in self.collections:
            self.collections[name] = Collection(name, initial_data)
            log.info("create_collection", name=name, len=len(self.collections[name]))
        elif initial_data:
            self.collections[name].insert(initial_data)
        return self.collections[name]

    def create_collections(self, *names: str) -> None:
        for name in names:
            self.create_collection(name)

    def load_data(self, data: Mapping[str, Any]) -> None:
        for name, records in data.items():
            self.create_collection(name, records)

    # section: commands #######################################################

    def empty_data(self) -> None:
        """
        Remove every record from every collection, keeping the collections.
        """
        for collection in self.collections.values():
            collection.remove()

    def summary(self) -> list[CollectionSummary]:
        return sorted(
            (
                CollectionSummary(name=name, count=len(collection))
                for name, collection in self.collections.items()
            ),
            key=lambda s: s.name,
        )

    def dump(self) -> dict[str, list[Record]]:
        return {name: c.all() for name, c in self.collections.items()}
