"""
jobtree — Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros do jobtree.
Erros de resolução de jobs fazem parte do contrato operacional com o
renderer e com o operador, devendo ser:

- explícitos
- serializáveis
- rastreáveis ao job e ao campo de origem
- acionáveis

Nenhuma correção implícita é permitida.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class JobErrorPayload:
    """
    Payload canônico de erro do jobtree.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
      (sempre inclui `job` quando o erro pertence a um job)
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Identificadores
JOB_ILLEGAL_IDENTIFIER = "JOB_ILLEGAL_IDENTIFIER"

# Campos
JOB_UNKNOWN_SCM_TYPE = "JOB_UNKNOWN_SCM_TYPE"
JOB_MISSING_FIELD = "JOB_MISSING_FIELD"
JOB_MISCONFIGURED_FIELD = "JOB_MISCONFIGURED_FIELD"
JOB_UNKNOWN_JOB_TYPE = "JOB_UNKNOWN_JOB_TYPE"

# Repositórios
JOB_REPOSITORY_DUPLICATED = "JOB_REPOSITORY_DUPLICATED"
JOB_REPOSITORY_SUB_PATH = "JOB_REPOSITORY_SUB_PATH"

# Resolução
RESOLUTION_INTERNAL_ERROR = "RESOLUTION_INTERNAL_ERROR"
RESOLUTION_UNEXPECTED_ERROR = "RESOLUTION_UNEXPECTED_ERROR"


# Mensagens exibidas quando jobs não estão corretamente configurados
NOT_CONFIGURED = "is not configured correctly"
MIS_CONFIGURED = "is mis-configured"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def resolution_unexpected_error(
    *,
    job: Optional[str] = None,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Verifique o stacktrace; nenhum fallback é aplicado automaticamente.",
) -> JobErrorPayload:
    return JobErrorPayload(
        type=RESOLUTION_UNEXPECTED_ERROR,
        message="Falha inesperada durante a resolução dos jobs",
        details={
            "job": job,
            "exc_type": exc_type,
            "exc_message": exc_message,
        },
        hint=hint,
    )
