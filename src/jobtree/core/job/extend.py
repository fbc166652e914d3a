# src/jobtree/core/job/extend.py
"""
Motor de herança (merge) de jobs.

Este módulo implementa a política oficial de herança utilizada para
completar um job filho com os dados do job pai já resolvido.

Política de merge (v1):
    - campo escalar/aninhado → tabela explícita de `FieldRule`
      (filho ausente → valor do pai, senão default da regra)
    - triggers/repositories  → sobrescrita total (sem merge por elemento)
    - parameters             → join assimétrico por nome
      (restante do pai seguido pelos parâmetros do filho)
    - `override=True`        → inverte a prioridade para TODAS as regras

Princípios fundamentais:
    - O pai já deve estar resolvido (ordem pai-antes-de-filho é contrato
      do chamador, ver `engine.planner`)
    - Nenhuma heurística implícita: cada campo herdável tem uma regra
    - Falha rápida: validadores por campo rodam no momento do merge

Invariantes:
    - Após o merge todo campo coberto pela tabela é não-nulo
    - O pai nunca é mutado
    - Parâmetros resultantes têm nomes únicos, vencendo o filho

Limites explícitos:
    - Não valida o job por completo (ver `validation.verify_all`)
    - Não reescreve goals Maven (ver `maven_goals`)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from ..exceptions import (
    InternalInvariantError,
    MisconfiguredFieldError,
    MissingFieldError,
    UnknownJobTypeError,
    configuration_error,
)
from .beans import Artifactory, Deploy, Invoke, Mail, Parameter
from .model import JOB_FIELD_NAMES, Job
from .sanitize import sanitize
from .types import JobType, PostStepResult


Validator = Callable[[Job, Any], None]
Normalizer = Callable[[Job, Any], Any]


@dataclass(frozen=True)
class FieldRule:
    """
    Regra de herança de um campo.

    Campos:
    - name: atributo do Job
    - default: valor default, ou callable sem argumentos que produz uma
      instância nova (sub-registros e listas nunca são compartilhados)
    - validator: verificação opcional do valor final (falha rápida)
    - normalize: transformação aplicada a todo valor atribuído pelo merge
    """

    name: str
    default: Any
    validator: Optional[Validator] = None
    normalize: Optional[Normalizer] = None

    def default_value(self) -> Any:
        return self.default() if callable(self.default) else self.default


def _non_empty(job: Job, value: Any, name: str) -> None:
    if not value:
        raise configuration_error(
            MissingFieldError, job, name, f"[{job}] has empty <{name}> after merge"
        )


def _required(name: str) -> Validator:
    return lambda job, value: _non_empty(job, value, name)


def _enum_of(enum_cls: type, name: str, error_cls: type = MisconfiguredFieldError) -> Validator:
    def check(job: Job, value: Any) -> None:
        if not isinstance(value, enum_cls):
            raise configuration_error(
                error_cls,
                job,
                name,
                f"[{job}] has <{name}> [{value}] that is not a {enum_cls.__name__}",
                value=value,
            )

    return check


def _sanitize_local_repo(job: Job, value: Any) -> Any:
    return sanitize(value, "Local repo", job)


COMMON_RULES: Tuple[FieldRule, ...] = (
    FieldRule("description", "&nbsp;", _required("description")),
    FieldRule("scm_type", "svn", _required("scm_type")),
    FieldRule("job_type", JobType.MAVEN, _enum_of(JobType, "job_type", UnknownJobTypeError)),
    FieldRule("node", "master", _required("node")),
    FieldRule("jdk_name", "(Default)", _required("jdk_name")),
    FieldRule("run_post_steps_if_result", PostStepResult.ALL, _enum_of(PostStepResult, "run_post_steps_if_result")),
    FieldRule("auth_token", ""),
    FieldRule("scm", ""),
    FieldRule("build_wrappers", ""),
    FieldRule("properties", ""),
    FieldRule("prebuilders", ""),
    FieldRule("postbuilders", ""),
    FieldRule("publishers", ""),
    FieldRule("process", ""),
    FieldRule("use_update", False),
    FieldRule("do_revert", False),
    FieldRule("block_build_when_downstream_building", False),
    FieldRule("block_build_when_upstream_building", False),
    FieldRule("days_to_keep", -1),
    FieldRule("num_to_keep", -1),
    FieldRule("mail", Mail),
    FieldRule("invoke", Invoke),
    FieldRule("description_table", list),
    FieldRule("prebuilders_tasks", list),
    FieldRule("postbuilders_tasks", list),
)

FREE_RULES: Tuple[FieldRule, ...] = (
    FieldRule("tasks", list),
)

MAVEN_RULES: Tuple[FieldRule, ...] = (
    FieldRule("pom", "pom.xml", _required("pom")),
    FieldRule("maven_goals", "-B -e clean install", _required("maven_goals")),
    FieldRule("maven_name", "(Default)", _required("maven_name")),
    FieldRule("maven_opts", ""),
    FieldRule("build_on_snapshot", False),
    FieldRule("private_repository", False),
    FieldRule("archiving_disabled", False),
    FieldRule("reporters", ""),
    FieldRule("local_repo_base", ""),
    FieldRule("local_repo", "", normalize=_sanitize_local_repo),
    FieldRule("deploy", Deploy),
    FieldRule("artifactory", Artifactory),
)


def _check_rules(*tables: Tuple[FieldRule, ...]) -> None:
    for table in tables:
        for rule in table:
            if rule.name not in JOB_FIELD_NAMES:
                raise InternalInvariantError(
                    message=f"Field rule references unknown Job field [{rule.name}]",
                    details={"field": rule.name},
                )


_check_rules(COMMON_RULES, FREE_RULES, MAVEN_RULES)


def apply_rule(job: Job, parent: Job, rule: FieldRule, override: bool = False) -> None:
    """
    Define o campo da regra usando o valor do pai ou o default.

    O valor do filho só é substituído quando ausente (`None`) ou quando
    `override` é verdadeiro.
    """
    if getattr(job, rule.name) is None or override:
        inherited = getattr(parent, rule.name)
        value = inherited if inherited is not None else rule.default_value()
        if isinstance(value, list):
            value = list(value)
        if rule.normalize is not None:
            value = rule.normalize(job, value)
        setattr(job, rule.name, value)

    value = getattr(job, rule.name)
    if value is None:
        raise InternalInvariantError(
            message=f"[{job}] has null [{rule.name}] after merge",
            details={"job": str(job), "field": rule.name},
        )

    if rule.validator is not None:
        rule.validator(job, value)


def join_parameters(parent_parameters: List[Parameter], parameters: List[Parameter]) -> List[Parameter]:
    """
    Junta os parâmetros herdados do pai com os do job atual.

    Parâmetros do pai cujo nome também é declarado pelo filho são
    descartados; o restante do pai vem antes dos parâmetros do filho.
    """
    names = {p.name for p in parameters}
    return [p for p in parent_parameters if p.name not in names] + list(parameters)


def shadowed_parameters(parent_parameters: List[Parameter], parameters: List[Parameter]) -> List[str]:
    """Nomes de parâmetros do pai sobrescritos pelo filho (para warnings)."""
    names = {p.name for p in parameters}
    return [p.name for p in parent_parameters if p.name in names]


def extend(job: Job, parent: Job, override: bool = False) -> Job:
    """
    Completa o job com os dados herdados do pai já resolvido.

    Args:
        job: job filho (mutado in-place e retornado).
        parent: job pai, já resolvido.
        override: quando verdadeiro, os dados do pai têm prioridade sobre
            os dados do próprio job (usado apenas para "forçar" valores).

    Returns:
        O próprio `job`, agora no estado "merged".

    Raises:
        MissingFieldError: se um validador de campo rejeitar o valor final.
        IllegalIdentifierError: se `local_repo` herdado for um nome reservado.
    """
    for rule in COMMON_RULES:
        apply_rule(job, parent, rule, override)

    if (not job.triggers or override) and parent.triggers:
        job.triggers = list(parent.triggers)

    if (not job.parameters or override) and parent.parameters:
        job.parameters = list(parent.parameters)
    elif parent.parameters:
        job.parameters = join_parameters(parent.parameters, job.parameters)

    if (not job.repositories or override) and parent.repositories:
        job.repositories = list(parent.repositories)

    # job_type já foi resolvido pela tabela comum
    if job.job_type == JobType.FREE:
        for rule in FREE_RULES:
            apply_rule(job, parent, rule, override)

    if job.job_type == JobType.MAVEN:
        for rule in MAVEN_RULES:
            apply_rule(job, parent, rule, override)

    return job
