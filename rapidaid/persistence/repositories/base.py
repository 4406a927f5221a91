"""Generic async Firestore repository for top-level collections."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generic, Iterator, Type, TypeVar

from google.api_core.exceptions import GoogleAPICallError
from pydantic import ValidationError

from rapidaid.contracts.common import FirestoreModel
from rapidaid.persistence.errors import DocumentNotFoundError, RetrievalError
from rapidaid.persistence.firestore_client import get_firestore_client

T = TypeVar("T", bound=FirestoreModel)


@contextmanager
def translate_store_errors(collection: str) -> Iterator[None]:
    """Re-raise Firestore RPC failures as :class:`RetrievalError`."""
    try:
        yield
    except GoogleAPICallError as exc:
        raise RetrievalError(collection, str(exc)) from exc


class BaseRepository(Generic[T]):
    """Reads for a Firestore collection such as ``/ambulances``.

    Serialization relies entirely on the contract's ``to_firestore()``
    and ``from_firestore()`` methods; there is no extra mapping layer. A document
    that does not validate against its contract is reported as a
    :class:`RetrievalError`, the same as an unreachable store.
    """

    def __init__(self, model_class: Type[T], collection_name: str):
        self._model_class = model_class
        self._collection_name = collection_name

    @property
    def collection_name(self) -> str:
        return self._collection_name

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _collection_ref(self):
        db = get_firestore_client()
        return db.collection(self._collection_name)

    def hydrate(self, doc: Any) -> T:
        """Build a contract from a document snapshot."""
        data = doc.to_dict()
        data["id"] = doc.id
        try:
            return self._model_class.from_firestore(data)
        except ValidationError as exc:
            raise RetrievalError(
                self._collection_name,
                f"malformed document {doc.id} ({exc.error_count()} invalid fields)",
            ) from exc

    async def _run_query(self, query) -> list[T]:
        results: list[T] = []
        with translate_store_errors(self._collection_name):
            async for doc in query.stream():
                results.append(self.hydrate(doc))
        return results

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get(self, doc_id: str) -> T | None:
        """Fetch a single document by ID. Returns *None* if missing."""
        with translate_store_errors(self._collection_name):
            doc = await self._collection_ref().document(doc_id).get()
        if not doc.exists:
            return None
        return self.hydrate(doc)

    async def require(self, doc_id: str) -> T:
        """Like :meth:`get` but raises :class:`DocumentNotFoundError`."""
        entity = await self.get(doc_id)
        if entity is None:
            raise DocumentNotFoundError(self._collection_name, doc_id)
        return entity
