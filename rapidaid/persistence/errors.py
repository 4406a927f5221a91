"""Persistence-specific exceptions."""


class PersistenceError(Exception):
    """Base exception for all persistence errors."""


class DocumentNotFoundError(PersistenceError):
    """Raised when a Firestore document does not exist. Not retryable."""

    def __init__(self, collection: str, doc_id: str):
        self.collection = collection
        self.doc_id = doc_id
        super().__init__(f"{collection}/{doc_id} not found")


class RetrievalError(PersistenceError):
    """Raised when Firestore is unreachable, times out or returns a malformed document.

    Transient: callers may retry.
    """

    def __init__(self, collection: str, reason: str):
        self.collection = collection
        self.reason = reason
        super().__init__(f"failed to load {collection}: {reason}")


class AmbulanceUnavailableError(PersistenceError):
    """Raised when a request targets an ambulance that is not Available."""

    def __init__(self, ambulance_id: str, status: str):
        self.ambulance_id = ambulance_id
        self.status = status
        super().__init__(f"ambulance {ambulance_id} is {status}")
