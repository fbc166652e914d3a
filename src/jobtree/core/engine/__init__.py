"""
Engine do jobtree.

Este pacote contém a implementação responsável por **planejar** e
**executar** a resolução de uma árvore de jobs.

Componentes principais:
    - planner  → ordem pai-antes-de-filho e validações estruturais da árvore
    - resolver → merge → reescrita de goals → validação, job a job

Invariantes:
    - Jobs só são estendidos após seus pais
    - Cada job é resolvido exatamente uma vez por passada
    - A passada é síncrona e não mantém estado após retornar
"""

from .planner import CycleDetectedError, DuplicateJobIdError, UnknownParentError, plan_resolution
from .resolver import JobResolver, ResolutionResult, resolve_jobs, resolve_tree

__all__ = [
    "CycleDetectedError",
    "DuplicateJobIdError",
    "JobResolver",
    "ResolutionResult",
    "UnknownParentError",
    "plan_resolution",
    "resolve_jobs",
    "resolve_tree",
]
