"""
Document-backed resources: exercises, patients, programs

Each repository runs its mutations inside DocumentStore.transaction(), so a
create/update/delete (and the patient -> programs cascade) is one load/save.
"""
import logging
import uuid
from datetime import date
from typing import Any, Dict, List

from physioflow.core.errors import NotFound
from physioflow.database.document_store import Document, DocumentStore
from physioflow.services.program_view import build_program_detail

logger = logging.getLogger(__name__)


def new_id() -> str:
    return str(uuid.uuid4())


def today_iso() -> str:
    return date.today().isoformat()


class DocumentCollection:
    """
    list / get / create / update / delete over one collection of the document
    """
    name = ""
    label = "Item"
    # Keys a patch may never overwrite
    immutable = ("id",)

    def __init__(self, store: DocumentStore):
        self.store = store

    def list(self) -> List[Dict[str, Any]]:
        return self.store.collection(self.name)

    def get(self, item_id: str) -> Dict[str, Any]:
        for item in self.list():
            if item.get('id') == item_id:
                return item
        raise NotFound(f"{self.label} not found")

    def prepare(self, payload: Dict[str, Any], document: Document) -> Dict[str, Any]:
        """Hook for server-assigned fields on create"""
        return payload

    def cascade(self, item_id: str, document: Document):
        """Hook for dependent deletes, runs in the same transaction"""

    def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        with self.store.transaction() as document:
            fields = {k: v for k, v in payload.items() if k not in self.immutable}
            item = {"id": new_id(), **self.prepare(fields, document)}
            document[self.name].append(item)
        logger.info(f"Created {self.label.lower()} {item['id']}")
        return item

    def update(self, item_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        """
        Shallow-merge patch over the stored entity

        Fields not in the patch are preserved. Raises NotFound if the id
        is unknown; nothing is written in that case.
        """
        changes = {k: v for k, v in patch.items() if k not in self.immutable}
        with self.store.transaction() as document:
            items = document[self.name]
            for index, existing in enumerate(items):
                if existing.get('id') == item_id:
                    merged = {**existing, **changes}
                    items[index] = merged
                    break
            else:
                raise NotFound(f"{self.label} not found")
        logger.info(f"Updated {self.label.lower()} {item_id}")
        return merged

    def delete(self, item_id: str) -> bool:
        """
        Remove the entity if present; unknown ids are a no-op
        """
        with self.store.transaction() as document:
            before = len(document[self.name])
            document[self.name] = [i for i in document[self.name] if i.get('id') != item_id]
            removed = before - len(document[self.name])
            self.cascade(item_id, document)
        logger.info(f"Deleted {self.label.lower()} {item_id} (removed={removed})")
        return True


class ExerciseRepository(DocumentCollection):
    """
    Exercises

    Deleting an exercise leaves programs that reference it untouched;
    readers skip ids that no longer resolve.
    """
    name = "exercises"
    label = "Exercise"


class PatientRepository(DocumentCollection):
    name = "patients"
    label = "Patient"
    immutable = ("id", "startDate")

    def prepare(self, payload, document):
        return {**payload, "startDate": today_iso()}

    def cascade(self, item_id, document):
        # No program may outlive its patient
        before = len(document["programs"])
        document["programs"] = [p for p in document["programs"] if p.get('patientId') != item_id]
        dropped = before - len(document["programs"])
        if dropped:
            logger.info(f"Cascade removed {dropped} program(s) of patient {item_id}")


class ProgramRepository(DocumentCollection):
    name = "programs"
    label = "Program"
    immutable = ("id", "patientId", "startDate")

    def create(self, payload):
        # patientId is immutable on update but required on create
        with self.store.transaction() as document:
            patient_id = payload.get('patientId')
            if not any(p.get('id') == patient_id for p in document["patients"]):
                raise NotFound("Patient not found")
            fields = {k: v for k, v in payload.items() if k not in ("id", "startDate")}
            item = {"id": new_id(), **fields, "startDate": today_iso()}
            document[self.name].append(item)
        logger.info(f"Created program {item['id']} for patient {patient_id}")
        return item

    def detail(self, program_id: str) -> Dict[str, Any]:
        """
        Program with patient and exercises resolved from one snapshot
        """
        document = self.store.load()
        for program in document[self.name]:
            if program.get('id') == program_id:
                return build_program_detail(program, document)
        raise NotFound("Program not found")
