# src/jobtree/core/job/validation.py
"""
Validação pós-merge de jobs.

Este módulo verifica que um job está completamente configurado antes de
ser entregue ao renderer. Todo campo que o renderer usa "como está"
(sem condicional) precisa estar definido aqui.

Estados terminais:
    - válido   → `verify_all` retorna sem exceção
    - inválido → exceção nomeando o job e o campo ausente/conflitante

Política (v1):
    - jobs abstratos são sempre válidos (nunca são renderizados)
    - verificações universais de presença
    - todo build-step precisa de classe e markup não vazios
    - ramificação por `job_type` (campos obrigatórios vs. proibidos)
    - validação da lista de repositórios, independente do tipo

Limites explícitos:
    - Não completa campos (ver `extend`)
    - Não tenta corrigir configurações inválidas
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence

from ..errors import MIS_CONFIGURED, NOT_CONFIGURED
from ..exceptions import (
    InternalInvariantError,
    MisconfiguredFieldError,
    MissingFieldError,
    RepositoryDuplicatedError,
    RepositorySubPathError,
    configuration_error,
)
from .model import Job
from .tasks import Task, hudson_class, markup
from .types import JobType


# Campos que precisam ser "truthy" (string/enum não vazio)
REQUIRED_NON_EMPTY = (
    "id",
    "jenkins_url",
    "generation_pom",
    "description",
    "scm_type",
    "job_type",
    "node",
    "jdk_name",
)

# Campos que só precisam ser não-nulos (vazio é permitido)
REQUIRED_NON_NULL = (
    "run_post_steps_if_result",
    "auth_token",
    "scm",
    "properties",
    "publishers",
    "build_wrappers",
    "prebuilders",
    "postbuilders",
    "process",
    "use_update",
    "do_revert",
    "days_to_keep",
    "num_to_keep",
    "description_table",
    "mail",
    "invoke",
    "prebuilders_tasks",
    "postbuilders_tasks",
    "block_build_when_downstream_building",
    "block_build_when_upstream_building",
)

MAVEN_ONLY_NON_EMPTY = ("pom", "maven_goals", "maven_name")

MAVEN_ONLY_NON_NULL = (
    "maven_opts",
    "build_on_snapshot",
    "private_repository",
    "archiving_disabled",
    "reporters",
    "local_repo_base",
    "local_repo",
    "deploy",
    "artifactory",
)


def _missing(job: Job, name: str, reason: Optional[str] = None) -> MissingFieldError:
    return configuration_error(
        MissingFieldError,
        job,
        name,
        f"[{job}] {NOT_CONFIGURED}: {reason or f'missing <{name}>'}",
    )


def _misconfigured(job: Job, name: str, reason: str, value: Any = None) -> MisconfiguredFieldError:
    return configuration_error(
        MisconfiguredFieldError,
        job,
        name,
        f"[{job}] {MIS_CONFIGURED}: {reason}",
        value=value,
    )


def verify_tasks(job: Job, name: str, tasks: Optional[Iterable[Task]]) -> None:
    for task in tasks or ():
        if not (hudson_class(task) and markup(task)):
            raise _misconfigured(job, name, f"Task [{task}] - Hudson class or markup is missing")


def _verify_free(job: Job) -> None:
    if not job.tasks:
        raise _missing(job, "tasks")
    verify_tasks(job, "tasks", job.tasks)

    for name in MAVEN_ONLY_NON_EMPTY:
        if getattr(job, name):
            raise _misconfigured(job, name, f"<{name}> is not active in free-style jobs")

    # "não nulo" aqui: até valores vazios indicam configuração Maven
    for name in MAVEN_ONLY_NON_NULL:
        if getattr(job, name) is not None:
            raise _misconfigured(job, name, f"<{name}> is not active in free-style jobs")


def _verify_maven(job: Job) -> None:
    if job.tasks:
        raise _misconfigured(job, "tasks", "<tasks> is not active in maven jobs")

    for name in MAVEN_ONLY_NON_EMPTY:
        if not getattr(job, name):
            raise _missing(job, name)

    for name in MAVEN_ONLY_NON_NULL:
        if getattr(job, name) is None:
            raise _missing(job, name, f"'{name}' is null?")

    if (job.deploy.url or job.artifactory.name) and job.archiving_disabled:
        raise _misconfigured(
            job,
            "archiving_disabled",
            "archiving is disabled - artifacts deploy to Maven or Artifactory repository can not be used",
        )

    if job.private_repository and (job.local_repo_base or job.local_repo or job.local_repo_path):
        raise _misconfigured(
            job,
            "private_repository",
            "<privateRepository> is specified, no <localRepoBase>, <localRepo>, or <localRepoPath> should be defined",
        )


def verify_all(job: Job) -> None:
    """
    Verifica que o job está completamente configurado.

    Raises:
        MissingFieldError: campo obrigatório ausente.
        MisconfiguredFieldError: campo proibido para o tipo do job ou
            build-step sem classe/markup.
        UnknownScmTypeError: `scm_type` fora da tabela.
        RepositoryDuplicatedError / RepositorySubPathError: lista de
            repositórios inconsistente.
        InternalInvariantError: `job_type` fora do enum fechado.
    """
    if job.is_abstract:
        return

    for name in REQUIRED_NON_EMPTY:
        if not getattr(job, name):
            raise _missing(job, name)

    # levanta UnknownScmTypeError para valores fora da tabela
    _ = job.scm_class

    for name in REQUIRED_NON_NULL:
        if getattr(job, name) is None:
            raise _missing(job, name, f"'{name}' is null?")

    verify_tasks(job, "prebuilders_tasks", job.prebuilders_tasks)
    verify_tasks(job, "postbuilders_tasks", job.postbuilders_tasks)

    if job.job_type == JobType.FREE:
        _verify_free(job)
    elif job.job_type == JobType.MAVEN:
        _verify_maven(job)
    else:
        raise InternalInvariantError(
            message=(
                f"Unknown job type [{job.job_type}]. "
                f'Known types are "{JobType.FREE.value}" and "{JobType.MAVEN.value}"'
            ),
            details={"job": str(job), "field": "job_type", "value": str(job.job_type)},
        )

    verify_repositories([r.remote for r in job.repositories], job)


# ---------------------------------------------------------------------------
# Repositórios
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RepositoryConflict:
    """
    Conflito detectado entre repositórios remotos de um job.

    - kind: "duplicated" ou "sub_path"
    - repository: repositório verificado
    - other: repositório que o contém (apenas "sub_path")
    - occurrences: quantas vezes `repository` aparece na lista
    """

    kind: str
    repository: str
    other: Optional[str] = None
    occurrences: int = 1


def find_repository_conflicts(urls: Sequence[str]) -> List[RepositoryConflict]:
    """
    Varre o produto cartesiano da lista e retorna os conflitos na ordem
    em que são encontrados.

    Cada repositório duplicado é reportado uma única vez, independente de
    quantas cópias existam; cada par (repositório, sub-caminho) também.
    """
    conflicts: List[RepositoryConflict] = []
    reported_duplicates = set()
    reported_sub_paths = set()

    for repo in urls:
        equal_seen = 0
        for other in urls:
            if repo == other:
                # um repositório só pode ser igual a si mesmo uma vez
                equal_seen += 1
                if equal_seen != 1 and repo not in reported_duplicates:
                    reported_duplicates.add(repo)
                    conflicts.append(
                        RepositoryConflict("duplicated", repo, occurrences=list(urls).count(repo))
                    )
            elif (repo.lower() + "/") in other.lower() and (repo, other) not in reported_sub_paths:
                reported_sub_paths.add((repo, other))
                conflicts.append(RepositoryConflict("sub_path", repo, other=other))

    return conflicts


def verify_repositories(urls: Sequence[str], job: Any = None) -> None:
    """
    Verifica que nenhum repositório remoto aparece mais de uma vez e que
    nenhum é sub-caminho de outro (o scheduler falha no checkout).

    Raises:
        RepositoryDuplicatedError: no primeiro repositório duplicado.
        RepositorySubPathError: no primeiro repositório contido em outro.
    """
    conflicts = find_repository_conflicts(urls)
    if not conflicts:
        return

    first = conflicts[0]
    owner = job if job is not None else "repositories"
    if first.kind == "duplicated":
        raise configuration_error(
            RepositoryDuplicatedError,
            owner,
            "repositories",
            f"[{owner}]: Repo [{first.repository}] is duplicated",
            value=first.repository,
        )
    raise configuration_error(
        RepositorySubPathError,
        owner,
        "repositories",
        f"[{owner}]: Repo [{first.repository}] is duplicated in [{first.other}] - you should remove [{first.other}]",
        value=first.repository,
        hint=f"Remova [{first.other}] da lista de repositórios",
    )
