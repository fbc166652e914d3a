# src/jobtree/__init__.py
"""
jobtree — resolução de árvores de configuração de jobs de CI.

Cada registro de job pode declarar um pai e omitir campos a serem
herdados. O jobtree completa cada registro a partir do pai (com
defaults por campo), reescreve os goals de jobs Maven e valida um
conjunto de invariantes por tipo de job antes que o registro seja
entregue a um renderer externo.

Limites explícitos:
    - Não renderiza o formato nativo do scheduler
    - Não descobre projetos nem grava arquivos de saída
"""

from .core.config import load_job_tree
from .core.engine import resolve_jobs, resolve_tree
from .core.exceptions import ConfigurationError, InternalInvariantError
from .core.job import Job, JobType, PostStepResult

__all__ = [
    "ConfigurationError",
    "InternalInvariantError",
    "Job",
    "JobType",
    "PostStepResult",
    "load_job_tree",
    "resolve_jobs",
    "resolve_tree",
]
