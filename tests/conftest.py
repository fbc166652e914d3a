# tests/conftest.py
"""
Fixtures compartilhados para testes do jobtree.

Este módulo define fixtures reutilizáveis que fornecem:
- documentos YAML mínimos e determinísticos da árvore de jobs
- fábrica de `Job`s declarativos
- contexto de resolução controlado (ResolutionContext)
- jobs já resolvidos, prontos para a validação

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Dados retornados são determinísticos e isolados
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture realiza I/O (arquivos são escritos pelos testes via tmp_path)
    - Todas as fixtures são seguras para execução em paralelo
"""

import pytest


JENKINS_URL = "http://ci.example.com"
GENERATION_POM = "build/pom.xml"
HOME = "/home/ci"


# =====================================================
# Loader fixtures
# =====================================================

@pytest.fixture
def tree_defaults_yaml() -> str:
    """
    Árvore declarativa típica (`jobs.defaults.yaml`).

    Três níveis: `base` (abstrato) → `maven-base` (abstrato) → `app`,
    mais um job free-style independente.
    """
    return """
jenkins_url: http://ci.example.com
generation_pom: build/pom.xml
home: /home/ci
jobs:
  - id: base
    abstract: true
    description: Company base job
    scm_type: git
    parameters:
      - {name: BRANCH, value: master}
      - {name: PROFILE, value: ci}
  - id: maven-base
    abstract: true
    parent: base
    job_type: maven
    pom: parent/pom.xml
    maven_goals: -B clean deploy -P{profile}
  - id: app
    parent: maven-base
    repository: {remote: "git://scm/app"}
    parameter: {name: PROFILE, value: release}
  - id: nightly scripts
    parent: base
    job_type: free
    tasks:
      - {type: shell, command: ./run.sh}
"""


@pytest.fixture
def tree_local_yaml() -> str:
    """Override local: troca o goal de `maven-base` e adiciona um job."""
    return """
jobs:
  - id: maven-base
    maven_goals: -B clean install
  - id: docs
    parent: base
    job_type: free
    tasks:
      - {type: batch_file, command: make.bat html}
"""


# =====================================================
# Job fixtures
# =====================================================

@pytest.fixture
def make_job():
    """
    Fábrica de jobs declarativos (não resolvidos).

    Retorna um callable `make_job(id, **fields)`.
    """
    from jobtree.core.job.model import Job

    def _make(job_id: str = "job", **fields):
        return Job(id=job_id, **fields)

    return _make


@pytest.fixture
def ctx():
    from jobtree.core.resolution_context import ResolutionContext

    return ResolutionContext(jenkins_url=JENKINS_URL, generation_pom=GENERATION_POM, home=HOME)


@pytest.fixture
def resolve_alone(make_job):
    """
    Resolve um job isolado contra um pai vazio (defaults da tabela),
    carimbando os settings de geração, sem validar.
    """
    from jobtree.core.job.extend import extend

    def _resolve(job):
        job.jenkins_url = JENKINS_URL
        job.generation_pom = GENERATION_POM
        return extend(job, make_job("defaults"))

    return _resolve


@pytest.fixture
def maven_job(make_job, resolve_alone):
    """Job Maven resolvido e válido."""
    from jobtree.core.job.types import JobType

    return resolve_alone(make_job("maven-app", job_type=JobType.MAVEN, description="Maven app"))


@pytest.fixture
def free_job(make_job, resolve_alone):
    """Job free-style resolvido e válido."""
    from jobtree.core.job.tasks import Shell
    from jobtree.core.job.types import JobType

    return resolve_alone(
        make_job("scripts", job_type=JobType.FREE, description="Scripts", tasks=[Shell(command="make")])
    )
