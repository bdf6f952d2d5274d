"""
Chunk records: wraps chunk strings with deterministic ids and hashes.
Same text + same processing config always yields the same chunk_hash and chunk_id.
"""

import hashlib
import json

from pydantic import BaseModel, ConfigDict, Field

from docprep.config.processing.models import ProcessingConfig
from docprep.services.chunking.tokenizer import count_tokens
from docprep.utils.ids import generate_chunk_id


class ChunkRecord(BaseModel):
    """A single chunk plus identity and size metadata."""

    model_config = ConfigDict(frozen=True)

    chunk_id: str
    chunk_index: int = Field(..., ge=0)
    chunk_text: str
    char_count: int = Field(..., ge=0)
    token_count: int = Field(..., ge=0, description="tiktoken count, or character estimate")
    chunk_hash: str


def compute_chunk_hash(chunk_text: str, config: ProcessingConfig) -> str:
    """Chunk hash = SHA-256(chunk_text + canonical processing config)."""
    config_canonical = json.dumps(config.model_dump(mode="json"), sort_keys=True)
    payload = f"{chunk_text}|{config_canonical}"
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def build_chunk_records(
    chunks: list[str],
    document_id: str,
    config: ProcessingConfig,
) -> list[ChunkRecord]:
    """Build one ChunkRecord per chunk, in order."""
    records: list[ChunkRecord] = []
    for i, chunk_text in enumerate(chunks):
        chunk_hash = compute_chunk_hash(chunk_text, config)
        records.append(
            ChunkRecord(
                chunk_id=generate_chunk_id(document_id, i, chunk_hash),
                chunk_index=i,
                chunk_text=chunk_text,
                char_count=len(chunk_text),
                token_count=count_tokens(chunk_text),
                chunk_hash=chunk_hash,
            )
        )
    return records
