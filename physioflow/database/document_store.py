"""
JSON document storage

- One file holds exercises, patients, programs and compliance
- Reads fail soft (missing or corrupt file reads as an empty document)
- Writes fail hard and are atomic (temp file + os.replace)
- A single-writer lock serializes every load/mutate/save cycle
"""
import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List

from physioflow.core.errors import StoreUnavailable

logger = logging.getLogger(__name__)

Document = Dict[str, Any]

COLLECTIONS = ("exercises", "patients", "programs", "compliance")


def empty_document() -> Document:
    return {name: [] for name in COLLECTIONS}


class DocumentStore:
    """
    Gateway to the JSON document

    Created once per application and shared by every document-backed
    repository. Unknown top-level keys survive every save.
    """

    def __init__(self, filepath: str):
        self.path = Path(filepath)
        self._lock = threading.RLock()

    def load(self) -> Document:
        """
        Read the document, return the zero-value document if not readable
        """
        with self._lock:
            try:
                with open(self.path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except FileNotFoundError:
                return empty_document()
            except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
                logger.warning(f"Could not read {self.path}, using empty document: {e}")
                return empty_document()

            if not isinstance(data, dict):
                logger.warning(f"{self.path} does not hold a JSON object, using empty document")
                return empty_document()

            for name in COLLECTIONS:
                if not isinstance(data.get(name), list):
                    data[name] = []
            return data

    def save(self, document: Document):
        """
        Write the whole document atomically

        Raises StoreUnavailable if the write cannot complete; the previous
        file content is left untouched in that case.
        """
        with self._lock:
            tmp_name = None
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                fd, tmp_name = tempfile.mkstemp(
                    dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
                )
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    json.dump(document, f, indent=2, ensure_ascii=False)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_name, self.path)
            except (OSError, TypeError, ValueError) as e:
                if tmp_name and os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                logger.error(f"Failed to save {self.path}: {e}")
                raise StoreUnavailable(f"Failed to save document: {e}") from e

    @contextmanager
    def transaction(self) -> Iterator[Document]:
        """
        Load, yield for mutation, save

        The lock is held for the whole cycle so concurrent writers cannot
        lose each other's updates. Nothing is saved if the block raises.
        """
        with self._lock:
            document = self.load()
            yield document
            self.save(document)

    def collection(self, name: str) -> List[Dict[str, Any]]:
        """
        Read-only snapshot of one collection
        """
        return self.load()[name]
