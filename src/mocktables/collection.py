import re
from typing import Any, Callable, Iterable, Mapping
from pydantic import BaseModel
from structlog import get_logger
from ._utils import callable_name

log = get_logger()

Record = dict[str, Any]
RecordId = int | str
Query = Mapping[str, Any] | Callable[[Record], bool]

_ALL_DIGITS = re.compile(r"[0-9]+")


def _clone(data: Mapping[str, Any] | BaseModel) -> Record:
    if isinstance(data, BaseModel):
        return data.model_dump()
    return dict(data)


def _is_id_list(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_id(value: Any) -> bool:
    return isinstance(value, (int, str))


def _stringify(value: Any) -> str:
    # query values often come in as strings, so compare on a common form
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _merge(record: Record, attrs: Any) -> None:
    if isinstance(attrs, Mapping):
        record.update(attrs)


class Collection:
    """
    A named, ordered list of records, used as a stand-in for a database table.

    Records are plain dicts that always carry an ``id`` once inserted.
    Everything returned from the public methods is a shallow copy, so callers
    can't change stored state without going through ``update`` or ``remove``.
    """

    def __init__(
        self,
        name: str,
        initial_data: Mapping[str, Any] | Iterable[Mapping[str, Any]] | None = None,
    ):
        self.name = name
        self._records: list[Record] = []
        if initial_data:
            self.insert(initial_data)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name}, {len(self)} records)"

    def __len__(self) -> int:
        return len(self._records)

    def all(self) -> list[Record]:
        """
        Return copies of every record, in insertion order.
        """
        return [dict(record) for record in self._records]

    def insert(self, data=None):
        """
        Insert a record, or a list of records.

        Records without an ``id`` (or with ``id=None``) are given
        ``len(self) + 1``. Returns a copy of the inserted record, or a list of
        copies when a list was passed in.
        """
        if _is_id_list(data):
            return [self._insert_one(item) for item in data]
        return self._insert_one(data or {})

    def _insert_one(self, data: Mapping[str, Any] | BaseModel) -> Record:
        record = _clone(data)
        if record.get("id") is None:
            record["id"] = len(self._records) + 1
        self._records.append(record)
        log.debug("insert", collection=self.name, id=record["id"])
        return dict(record)

    def find(self, ids):
        """
        Find by a single id (returns a record or None) or a list of ids
        (returns the records found, skipping ids that don't match).
        """
        if _is_id_list(ids):
            return [
                dict(record)
                for record in self._find_records(ids)
                if record is not None
            ]
        record = self._find_record(ids)
        if record is None:
            return None
        return dict(record)

    def where(self, query: Query) -> list[Record]:
        """
        Return copies of records matching ``query``.

        A mapping matches records where every key compares equal as a string,
        so ``{"id": "1"}`` matches ``{"id": 1}``. A callable is used as a
        predicate.
        """
        return [dict(record) for record in self._find_records_where(query)]

    def first_or_create(
        self, query: Query, defaults: Mapping[str, Any] | None = None
    ) -> Record:
        if matches := self._find_records_where(query):
            log.debug("first_or_create", collection=self.name, created=False)
            return dict(matches[0])
        attrs = dict(defaults or {})
        if isinstance(query, Mapping):
            attrs.update(query)
        log.debug("first_or_create", collection=self.name, created=True)
        return self.insert(attrs)

    def update(self, target=None, attrs: Mapping[str, Any] | None = None):
        """
        Update records in place; the shape of ``target`` decides which ones.

            update(attrs)            every record; returns those that changed
            update(id, attrs)        one record, or None if it isn't there
            update([ids], attrs)     the records found for those ids
            update(query, attrs)     records matching a mapping or predicate

        Returned records are copies taken after the update. Attrs that aren't a
        mapping change nothing.
        """
        if target is None or attrs is None:
            attrs = attrs if attrs is not None else target or {}
            changed = []
            for record in self._records:
                before = dict(record)
                _merge(record, attrs)
                if record != before:
                    changed.append(dict(record))
            log.debug("update", collection=self.name, num_changed=len(changed))
            return changed

        if _is_id(target):
            record = self._find_record(target)
            if record is None:
                return None
            _merge(record, attrs)
            log.debug("update", collection=self.name, id=record["id"])
            return dict(record)

        if _is_id_list(target):
            records = [r for r in self._find_records(target) if r is not None]
        else:
            records = self._find_records_where(target)
        for record in records:
            _merge(record, attrs)
        log.debug("update", collection=self.name, num_changed=len(records))
        return [dict(record) for record in records]

    def remove(self, target=None) -> None:
        """
        Remove records: all of them, one id, a list of ids, or a query match.

        Ids or queries that match nothing are ignored.
        """
        if target is None:
            log.debug("remove", collection=self.name, num_removed=len(self))
            self._records = []
            return

        if _is_id(target):
            records = [self._find_record(target)]
        elif _is_id_list(target):
            records = self._find_records(target)
        else:
            records = self._find_records_where(target)

        # compare by identity, two records may hold identical values
        doomed = {id(record) for record in records if record is not None}
        if doomed:
            self._records = [r for r in self._records if id(r) not in doomed]
        log.debug("remove", collection=self.name, num_removed=len(doomed))

    # section: private ########################################################
    # these return the stored dicts, public methods hand out copies

    def _find_record(self, id: RecordId) -> Record | None:
        if isinstance(id, str) and _ALL_DIGITS.fullmatch(id):
            id = int(id)
        for record in self._records:
            if record["id"] == id:
                return record
        return None

    def _find_records(self, ids: Iterable[RecordId]) -> list[Record | None]:
        return [self._find_record(id) for id in ids]

    def _find_records_where(self, query: Query) -> list[Record]:
        if callable(query):
            log.debug("where", collection=self.name, predicate=callable_name(query))
            return [record for record in self._records if query(record)]
        if not isinstance(query, Mapping):
            return []

        expected = {key: _stringify(value) for key, value in query.items()}

        def matches(record: Record) -> bool:
            return all(
                key in record and _stringify(record[key]) == value
                for key, value in expected.items()
            )

        return [record for record in self._records if matches(record)]
