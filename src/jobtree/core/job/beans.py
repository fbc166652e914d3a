# src/jobtree/core/job/beans.py
"""
Sub-registros e elementos de lista de um job.

Estes objetos são consumidos pelo renderer; a resolução só verifica
presença/ausência (e, no caso de `Deploy.url` / `Artifactory.name`,
se um destino de deploy está configurado).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Mail:
    recipients: str = ""
    send_for_unstable: bool = True
    send_to_individuals: bool = False


@dataclass(frozen=True)
class Invoke:
    """Jobs disparados ao final do build (lista separada por vírgulas)."""

    jobs: str = ""
    always: bool = False
    stable: bool = True
    unstable: bool = False
    failure: bool = False

    def job_ids(self) -> List[str]:
        return [j.strip() for j in self.jobs.split(",") if j.strip()]


@dataclass(frozen=True)
class Deploy:
    url: str = ""
    id: str = ""
    unique_version: bool = True
    even_if_unstable: bool = False


@dataclass(frozen=True)
class Artifactory:
    name: str = ""
    deploy_artifacts: bool = True
    include_env_vars: bool = False
    even_if_unstable: bool = False


@dataclass(frozen=True)
class DescriptionRow:
    key: str
    value: str
    bottom: bool = False


@dataclass(frozen=True)
class Trigger:
    type: str
    expression: str
    description: str = ""


@dataclass(frozen=True)
class Parameter:
    """Parâmetro de build; a identidade no merge é o `name`."""

    name: str
    type: str = "string"
    value: str = ""
    description: str = ""


@dataclass(frozen=True)
class Repository:
    remote: str
    local: Optional[str] = None
    git_branch: Optional[str] = None
