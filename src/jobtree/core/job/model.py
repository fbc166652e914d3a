# src/jobtree/core/job/model.py
"""
Entidade Job — um registro de configuração de job.

Um Job nasce da entrada declarativa com a maioria dos campos herdáveis
em `None` e percorre o ciclo:

    construído → merged (`extend` contra o pai resolvido)
               → validated (`verify_all` sem violações)
               → entregue ao renderer

Jobs abstratos param em "merged": existem apenas para serem pais.

Decisões arquiteturais:
    - NÃO declarar defaults nos campos herdáveis; o merge (`extend`) é o
      único responsável por preenchê-los a partir do pai ou da tabela de
      regras de campo
    - `id`, `is_abstract` e `disabled` são individuais (nunca herdados)
    - `id` e `local_repo` passam pela sanitização na construção

Invariantes:
    - `id` nunca é vazio e contém apenas `[A-Za-z0-9._-]`
    - `original_id` preserva o valor declarado para diagnóstico

Ao adicionar campos: atualizar a tabela de regras em `extend.py` e as
verificações em `validation.py`.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional

from ..exceptions import MissingFieldError, UnknownScmTypeError, configuration_error
from .beans import (
    Artifactory,
    Deploy,
    DescriptionRow,
    Invoke,
    Mail,
    Parameter,
    Repository,
    Trigger,
)
from .sanitize import sanitize
from .tasks import Task
from .types import SCM_CLASSES, JobType, PostStepResult


@dataclass(eq=False)
class Job:
    id: str
    parent: Optional[str] = None
    is_abstract: bool = False
    disabled: bool = False

    # Campos de geração (carimbados pelo resolver, não herdados)
    jenkins_url: Optional[str] = None
    generation_pom: Optional[str] = None

    job_type: Optional[JobType] = None
    description: Optional[str] = None
    description_table: Optional[List[DescriptionRow]] = None
    scm_type: Optional[str] = None
    node: Optional[str] = None
    jdk_name: Optional[str] = None
    run_post_steps_if_result: Optional[PostStepResult] = None
    auth_token: Optional[str] = None

    use_update: Optional[bool] = None
    do_revert: Optional[bool] = None
    block_build_when_downstream_building: Optional[bool] = None
    block_build_when_upstream_building: Optional[bool] = None
    days_to_keep: Optional[int] = None   # dias de builds antigos mantidos
    num_to_keep: Optional[int] = None    # quantidade de builds antigos mantidos

    mail: Optional[Mail] = None
    invoke: Optional[Invoke] = None
    invoked_by: List[str] = field(default_factory=list)

    tasks: Optional[List[Task]] = None
    prebuilders_tasks: Optional[List[Task]] = None
    postbuilders_tasks: Optional[List[Task]] = None

    triggers: List[Trigger] = field(default_factory=list)
    parameters: List[Parameter] = field(default_factory=list)
    repositories: List[Repository] = field(default_factory=list)

    # Somente Maven
    pom: Optional[str] = None
    maven_goals: Optional[str] = None
    maven_name: Optional[str] = None
    maven_opts: Optional[str] = None
    build_on_snapshot: Optional[bool] = None
    private_repository: Optional[bool] = None
    archiving_disabled: Optional[bool] = None
    local_repo_base: Optional[str] = None
    local_repo: Optional[str] = None
    local_repo_path: Optional[str] = None  # calculado em update_maven_goals
    deploy: Optional[Deploy] = None
    artifactory: Optional[Artifactory] = None

    # Pontos de extensão: XML bruto (CDATA) repassado ao renderer
    scm: Optional[str] = None
    reporters: Optional[str] = None
    publishers: Optional[str] = None
    build_wrappers: Optional[str] = None
    properties: Optional[str] = None
    prebuilders: Optional[str] = None
    postbuilders: Optional[str] = None
    process: Optional[str] = None

    original_id: str = field(init=False, default="")

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise configuration_error(
                MissingFieldError, f'Job "{self.id}"', "id", "Job id must be a non-empty string"
            )
        # id vira nome de pasta no workspace do scheduler
        self.original_id = self.id
        self.id = sanitize(self.id, "Job id", self)
        self.local_repo = sanitize(self.local_repo, "Local repo", self)

    def __str__(self) -> str:
        return f'Job "{self.original_id or self.id}"'

    @property
    def scm_class(self) -> str:
        if not self.scm_type:
            raise configuration_error(MissingFieldError, self, "scm_type", f"[{self}] has no <scmType>")
        scm_class = SCM_CLASSES.get(self.scm_type)
        if scm_class is None:
            raise configuration_error(
                UnknownScmTypeError,
                self,
                "scm_type",
                f"Unknown <scmType>{self.scm_type}</scmType>",
                value=self.scm_type,
                hint=f"Valores aceitos: {sorted(SCM_CLASSES)}",
            )
        return scm_class

    @property
    def is_maven(self) -> bool:
        return self.job_type == JobType.MAVEN

    def to_dict(self) -> Dict[str, Any]:
        """Representação serializável (JSON) usada para fingerprint e diagnóstico."""
        data = asdict(self, dict_factory=_json_dict)
        for name in ("tasks", "prebuilders_tasks", "postbuilders_tasks"):
            value = getattr(self, name)
            if value is not None:
                data[name] = [{"type": type(t).__name__, **asdict(t)} for t in value]
        return data


def _json_dict(items: List[Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in items:
        if isinstance(value, PostStepResult):
            value = value.key
        elif isinstance(value, Enum):
            value = value.value
        out[key] = value
    return out


JOB_FIELD_NAMES = frozenset(f.name for f in fields(Job))
