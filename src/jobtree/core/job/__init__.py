# src/jobtree/core/job/__init__.py
"""
Modelo de job e motor de resolução (merge → reescrita → validação).

Componentes:
    - sanitize    → identificadores seguros para nomes de pasta
    - types       → JobType, PostStepResult, tabela SCM
    - beans       → sub-registros (mail, invoke, deploy, ...) e itens de lista
    - tasks       → variantes de build-step e markup
    - model       → entidade Job
    - extend      → herança campo a campo e reconciliação de listas
    - maven_goals → reescrita de `maven_goals` para jobs Maven
    - validation  → bateria de invariantes pós-merge
"""

from .extend import extend, join_parameters
from .maven_goals import update_maven_goals
from .model import Job
from .sanitize import sanitize
from .types import SCM_CLASSES, JobType, PostStepResult
from .validation import verify_all, verify_repositories

__all__ = [
    "Job",
    "JobType",
    "PostStepResult",
    "SCM_CLASSES",
    "extend",
    "join_parameters",
    "sanitize",
    "update_maven_goals",
    "verify_all",
    "verify_repositories",
]
