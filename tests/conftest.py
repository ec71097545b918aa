from __future__ import annotations

import copy
import json
from typing import Any

import pytest


class FakeSnapshot:
    def __init__(self, reference: FakeDocumentRef, data: dict[str, Any] | None) -> None:
        self.reference = reference
        self.id = reference.id
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self) -> dict[str, Any] | None:
        return copy.deepcopy(self._data)


class FakeDocumentRef:
    def __init__(self, store: FakeFirestore, collection: str, doc_id: str) -> None:
        self._store = store
        self.collection = collection
        self.id = doc_id

    def get(self) -> FakeSnapshot:
        return FakeSnapshot(self, self._store.data.get(self.collection, {}).get(self.id))


class FakeQuery:
    def __init__(self, store: FakeFirestore, collection: str, filters: list[tuple[str, Any]]) -> None:
        self._store = store
        self._collection = collection
        self._filters = filters

    def where(self, *, filter: Any) -> FakeQuery:  # noqa: A002
        assert filter.op_string == "=="
        return FakeQuery(self._store, self._collection, [*self._filters, (filter.field_path, filter.value)])

    def stream(self):
        if self._store.fail_queries:
            raise RuntimeError("query failed")
        docs = self._store.data.get(self._collection, {})
        for doc_id, body in list(docs.items()):
            if all(body.get(field) == value for field, value in self._filters):
                yield FakeSnapshot(FakeDocumentRef(self._store, self._collection, doc_id), body)


class FakeCollection(FakeQuery):
    def __init__(self, store: FakeFirestore, name: str) -> None:
        super().__init__(store, name, [])
        self.name = name

    def document(self, doc_id: str) -> FakeDocumentRef:
        return FakeDocumentRef(self._store, self.name, doc_id)


class FakeBatch:
    def __init__(self, store: FakeFirestore) -> None:
        self._store = store
        self._ops: list[tuple[str, FakeDocumentRef, dict[str, Any] | None, bool]] = []

    def set(self, ref: FakeDocumentRef, data: dict[str, Any], merge: bool = False) -> None:
        self._ops.append(("set", ref, copy.deepcopy(data), merge))

    def delete(self, ref: FakeDocumentRef) -> None:
        self._ops.append(("delete", ref, None, False))

    def commit(self) -> list[None]:
        assert len(self._ops) <= 500, "Firestore batches are limited to 500 writes"
        for kind, ref, data, merge in self._ops:
            docs = self._store.data.setdefault(ref.collection, {})
            if kind == "delete":
                docs.pop(ref.id, None)
            elif merge and ref.id in docs:
                docs[ref.id].update(data)
            else:
                docs[ref.id] = data
        self._store.commits.append(len(self._ops))
        return [None] * len(self._ops)


class FakeFirestore:
    """In-memory stand-in for the parts of google.cloud.firestore.Client the tools use."""

    def __init__(self) -> None:
        self.data: dict[str, dict[str, dict[str, Any]]] = {}
        self.commits: list[int] = []
        self.fail_queries = False

    def collection(self, name: str) -> FakeCollection:
        return FakeCollection(self, name)

    def batch(self) -> FakeBatch:
        return FakeBatch(self)

    def seed(self, collection: str, doc_id: str, body: dict[str, Any]) -> None:
        self.data.setdefault(collection, {})[doc_id] = copy.deepcopy(body)


@pytest.fixture
def fake_db() -> FakeFirestore:
    return FakeFirestore()


@pytest.fixture
def write_json(tmp_path):
    def _write(payload: Any, name: str = "data.json") -> str:
        path = tmp_path / name
        path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        return str(path)

    return _write
