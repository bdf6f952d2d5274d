"""Id generation for documents and chunks. Deterministic where required."""

import hashlib


def generate_document_id(name: str, content: str) -> str:
    """Generate a deterministic document_id from a name and the raw content."""
    payload = f"{name}\x00{content}"
    digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()[:24]
    return f"doc_{digest}"


def generate_chunk_id(document_id: str, chunk_index: int, chunk_hash: str) -> str:
    """Generate a deterministic chunk_id from document, index, and hash. Stable for idempotency."""
    payload = f"{document_id}:{chunk_index}:{chunk_hash}"
    digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()[:24]
    return f"chunk_{digest}"
