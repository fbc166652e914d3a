# src/jobtree/core/job/types.py
"""
Tipos canônicos de um job.

Componentes principais:
    - JobType        → enum fechado de tipos de job (free, maven)
    - PostStepResult → limiar de resultado para execução de post-steps
    - SCM_CLASSES    → tabela fixa scm_type → classe SCM do scheduler

Invariantes:
    - Enums possuem valores textuais canônicos (o nome declarado no YAML)
    - A tabela SCM_CLASSES é imutável e deve bater exatamente com o scheduler

Limites explícitos:
    - Não executa merge nem validação
    - Não conhece o formato de renderização
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class JobType(str, Enum):
    """
    Tipos de job suportados.

    O tipo determina quais campos escalares são obrigatórios e quais são
    proibidos após o merge (ver `validation.verify_all`).
    """

    FREE = "free"
    MAVEN = "maven"

    @property
    def description(self) -> str:
        return {"free": "Free-Style", "maven": "Maven"}[self.value]


class PostStepResult(Enum):
    """
    Valores aceitos para `run_post_steps_if_result`.

    Cada membro carrega o nome do limiar no scheduler, sua severidade
    ordinal e a cor exibida. O renderer consome os três sem reinterpretar.
    """

    SUCCESS = ("success", "SUCCESS", 0, "BLUE")
    UNSTABLE = ("unstable", "UNSTABLE", 1, "YELLOW")
    ALL = ("all", "FAILURE", 2, "RED")

    def __init__(self, key: str, threshold: str, severity: int, color: str):
        self.key = key
        self.threshold = threshold
        self.severity = severity
        self.color = color

    @classmethod
    def from_key(cls, key: str) -> "PostStepResult":
        for member in cls:
            if member.key == key:
                return member
        raise KeyError(key)


SCM_CLASSES: Mapping[str, str] = MappingProxyType(
    {
        "none": "hudson.scm.NullSCM",
        "cvs": "hudson.scm.CVSSCM",
        "svn": "hudson.scm.SubversionSCM",
        "git": "hudson.plugins.git.GitSCM",
    }
)
