# src/jobtree/core/job/maven_goals.py
"""
Reescrita de `maven_goals` para jobs Maven (executada após o merge).

Transformações:
    1. `{token}` → `${token}` (convenção de substituição de propriedades
       do scheduler); ocorrências já prefixadas com `$` são preservadas
    2. injeção/substituição de `-Dmaven.repo.local="<path>"` a partir de
       `local_repo_base` e `local_repo`

Invariantes:
    - Reaplicar a reescrita substitui o argumento existente, nunca duplica
    - `private_repository` é incompatível com `local_repo_base`/`local_repo`
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

from ..exceptions import (
    InternalInvariantError,
    MisconfiguredFieldError,
    MissingFieldError,
    configuration_error,
)
from .model import Job
from .types import JobType


LOCAL_REPO_ARG = "-Dmaven.repo.local"

_PLACEHOLDER = re.compile(r"(?<!\$)\{([^{}]*)\}")
_LOCAL_REPO_TOKEN = re.compile(r"-Dmaven\.repo\.local\S*")


def add_dollar(goals: str) -> str:
    """Converte `{x}` em `${x}`."""
    return _PLACEHOLDER.sub(lambda m: "${" + m.group(1) + "}", goals)


def local_repo_path(local_repo_base: Optional[str], local_repo: Optional[str], home: Optional[str] = None) -> str:
    base = local_repo_base or f"{home if home is not None else Path.home()}/.m2/repository"
    return f"{base}/{local_repo or '.'}".replace("\\", "/")


def update_maven_goals(job: Job, home: Optional[str] = None) -> Job:
    """
    Atualiza `job.maven_goals` (e `job.local_repo_path`) in-place.

    Args:
        job: job Maven já resolvido pelo merge.
        home: diretório home usado quando `local_repo_base` está vazio
            (default: home do usuário corrente).

    Raises:
        MissingFieldError: se `maven_goals` estiver vazio.
        MisconfiguredFieldError: se `private_repository` for combinado com
            `local_repo_base`/`local_repo`.
        InternalInvariantError: se o job não for Maven.
    """
    if job.job_type != JobType.MAVEN:
        raise InternalInvariantError(
            message=f"[{job}] is not a Maven job, goals can not be updated",
            details={"job": str(job), "field": "job_type", "value": str(job.job_type)},
        )

    if not job.maven_goals:
        raise configuration_error(MissingFieldError, job, "maven_goals", f"[{job}] has empty <mavenGoals>")

    job.maven_goals = add_dollar(job.maven_goals)

    if job.private_repository:
        if job.local_repo_base or job.local_repo:
            raise configuration_error(
                MisconfiguredFieldError,
                job,
                "private_repository",
                f"[{job}] has <privateRepository> set, <localRepoBase> and <localRepo> shouldn't be specified",
            )
        return job

    if job.local_repo_base or job.local_repo:
        job.local_repo_path = local_repo_path(job.local_repo_base, job.local_repo, home)
        arg = f'{LOCAL_REPO_ARG}="{job.local_repo_path}"'
        if _LOCAL_REPO_TOKEN.search(job.maven_goals):
            job.maven_goals = _LOCAL_REPO_TOKEN.sub(lambda _m: arg, job.maven_goals, count=1)
        else:
            job.maven_goals = f"{job.maven_goals} {arg}"

    return job
