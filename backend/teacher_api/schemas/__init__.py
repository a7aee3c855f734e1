"""Request Schemas — pydantic models for the JSON bodies teacher routes accept.

Invariants:
    - Field names follow the wire contract (alumnoVinculoId, cursoMateriaId...)
    - Shape checks live here; business checks (enrollment, grade range) live in services
"""
