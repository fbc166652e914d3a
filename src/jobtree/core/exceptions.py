"""
jobtree — Canonical Exceptions (v1)

Este módulo define exceções tipadas internas do jobtree.

Objetivo:
- Permitir que merge, reescrita de goals e validação levantem exceções
  semânticas tipadas
- Facilitar o mapeamento determinístico para JobErrorPayload
- Evitar AssertionError/ValueError genéricos nos guardrails críticos

Regras:
- Exceções de configuração sempre carregam `job` e `field` em `details`.
- Exceções devem carregar apenas dados estruturados (serializáveis).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional

from . import errors
from .errors import JobErrorPayload


@dataclass(frozen=True)
class JobException(Exception):
    """Base class para exceções internas do jobtree.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    code: ClassVar[str] = errors.RESOLUTION_UNEXPECTED_ERROR

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message

    def to_payload(self) -> JobErrorPayload:
        return JobErrorPayload(
            type=self.code,
            message=self.message,
            details=dict(self.details),
            hint=self.hint,
        )


# ---------------------------------------------------------------------------
# Configuração (fatal para o job, corrigível pelo operador)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ConfigurationError(JobException):
    """Configuração declarativa de um job é inválida ou inconsistente."""


@dataclass(frozen=True)
class IllegalIdentifierError(ConfigurationError):
    """Identificador reservado pela plataforma (não pode virar nome de pasta)."""

    code: ClassVar[str] = errors.JOB_ILLEGAL_IDENTIFIER


@dataclass(frozen=True)
class UnknownScmTypeError(ConfigurationError):
    """`scm_type` fora da tabela de classes SCM conhecidas."""

    code: ClassVar[str] = errors.JOB_UNKNOWN_SCM_TYPE


@dataclass(frozen=True)
class MissingFieldError(ConfigurationError):
    """Campo obrigatório ausente após o merge."""

    code: ClassVar[str] = errors.JOB_MISSING_FIELD


@dataclass(frozen=True)
class MisconfiguredFieldError(ConfigurationError):
    """Campo presente mas proibido (ou conflitante) para o tipo do job."""

    code: ClassVar[str] = errors.JOB_MISCONFIGURED_FIELD


@dataclass(frozen=True)
class UnknownJobTypeError(ConfigurationError):
    """Valor declarado de `job_type` não pertence ao enum."""

    code: ClassVar[str] = errors.JOB_UNKNOWN_JOB_TYPE


@dataclass(frozen=True)
class RepositoryDuplicatedError(ConfigurationError):
    """O mesmo repositório remoto aparece mais de uma vez."""

    code: ClassVar[str] = errors.JOB_REPOSITORY_DUPLICATED


@dataclass(frozen=True)
class RepositorySubPathError(ConfigurationError):
    """Um repositório remoto é sub-caminho de outro repositório do job."""

    code: ClassVar[str] = errors.JOB_REPOSITORY_SUB_PATH


# ---------------------------------------------------------------------------
# Erro de programação
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class InternalInvariantError(JobException):
    """Ramo inalcançável ou contrato interno violado; nunca é erro de input."""

    code: ClassVar[str] = errors.RESOLUTION_INTERNAL_ERROR


def configuration_error(
    cls: type,
    job: Any,
    field_name: str,
    message: str,
    *,
    value: Any = None,
    hint: Optional[str] = None,
) -> ConfigurationError:
    """Monta uma exceção de configuração com `job`/`field` padronizados."""
    details: Dict[str, Any] = {"job": str(job), "field": field_name}
    if value is not None:
        details["value"] = value if isinstance(value, (str, int, float, bool)) else str(value)
    return cls(message=message, details=details, hint=hint)
