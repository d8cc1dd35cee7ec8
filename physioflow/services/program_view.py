"""
Program detail view

Joins a program with its patient and exercises. Exercise ids that no longer
resolve (the exercise was deleted) are skipped rather than reported.
"""
from typing import Any, Dict, List, Optional


def resolve_exercises(exercise_ids: List[str], exercises: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Look up exercises in program order, dropping dangling ids
    """
    by_id = {e.get('id'): e for e in exercises}
    return [by_id[eid] for eid in exercise_ids if eid in by_id]


def find_patient(patient_id: str, patients: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    return next((p for p in patients if p.get('id') == patient_id), None)


def build_program_detail(program: Dict[str, Any], document: Dict[str, Any]) -> Dict[str, Any]:
    return {
        **program,
        "patient": find_patient(program.get('patientId'), document.get("patients", [])),
        "exercises": resolve_exercises(program.get('exerciseIds', []), document.get("exercises", [])),
    }
