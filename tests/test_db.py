import pytest
from mocktables import Collection, Database
from mocktables.exceptions import CollectionNotFound
from testdata import contacts


def test_database_repr():
    db = Database({"contacts": [], "addresses": []})
    assert repr(db) == "Database(contacts, addresses)"


def test_create_collection():
    db = Database()
    collection = db.create_collection("contacts")
    assert isinstance(collection, Collection)
    assert db["contacts"] is collection
    assert db.contacts is collection
    assert "contacts" in db
    assert len(db) == 1


def test_create_collection_with_data():
    db = Database()
    db.create_collection("contacts", contacts())
    assert len(db.contacts) == 3


def test_create_collection_existing_inserts():
    db = Database()
    first = db.create_collection("contacts", [{"name": "Link"}])
    second = db.create_collection("contacts", [{"name": "Zelda"}])
    assert first is second
    assert [r["id"] for r in db.contacts.all()] == [1, 2]


def test_create_collections():
    db = Database()
    db.create_collections("contacts", "addresses")
    assert list(db) == ["contacts", "addresses"]
    assert db.addresses.all() == []


def test_load_data():
    db = Database()
    db.load_data({"contacts": contacts(), "addresses": [{"street": "Main"}]})
    assert len(db.contacts) == 3
    assert db.addresses.find(1) == {"street": "Main", "id": 1}


def test_missing_collection_item():
    with pytest.raises(CollectionNotFound):
        Database()["missing"]


def test_missing_collection_attribute():
    db = Database()
    with pytest.raises(AttributeError):
        db.missing
    assert not hasattr(db, "missing")


def test_empty_data():
    db = Database({"contacts": contacts(), "addresses": [{}]})
    db.empty_data()
    assert list(db) == ["contacts", "addresses"]
    assert db.dump() == {"contacts": [], "addresses": []}


def test_summary():
    db = Database({"contacts": contacts(), "addresses": []})
    assert [str(s) for s in db.summary()] == ["addresses (0)", "contacts (3)"]


def test_dump_returns_copies():
    db = Database({"contacts": contacts()})
    dump = db.dump()
    dump["contacts"][0]["name"] = "changed"
    assert db.contacts.find(1)["name"] == "Link"
