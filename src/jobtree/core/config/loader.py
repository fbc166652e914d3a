# src/jobtree/core/config/loader.py
"""
Loader canônico da árvore declarativa de jobs.

Este módulo é responsável por carregar, validar estruturalmente e
materializar a árvore de jobs a partir de:
    - um arquivo de defaults (obrigatório)
    - um arquivo local de overrides (opcional)

Formato do documento (v1):

    jenkins_url: http://ci.example.com
    generation_pom: pom.xml
    home: /home/ci            # opcional, usado na reescrita de goals
    jobs:
      - id: base
        abstract: true
        description: Base job
        scm_type: git
      - id: app
        parent: base
        job_type: maven
        repository: {remote: git://x/app}

Responsabilidades do módulo:
    - Carregar arquivos em YAML ou JSON
    - Resolver o documento efetivo via deep-merge determinístico
    - Converter registros declarativos em `Job`s NÃO resolvidos
      (a herança é responsabilidade do engine)

Invariantes:
    - O arquivo de defaults é obrigatório
    - Chaves desconhecidas em registros de job são rejeitadas
    - Overrides locais nunca mutam os defaults

Limites explícitos:
    - Não executa merge entre jobs pai/filho
    - Não valida completude de jobs
    - Não renderiza configuração do scheduler
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional
import json

import yaml  # PyYAML

from ..exceptions import UnknownJobTypeError, configuration_error
from ..job.beans import Artifactory, Deploy, DescriptionRow, Invoke, Mail, Parameter, Repository, Trigger
from ..job.model import JOB_FIELD_NAMES, Job
from ..job.tasks import TASK_TYPES
from ..job.types import JobType, PostStepResult
from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidJobRecordError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .merge import deep_merge


# Campos calculados durante a resolução, nunca declarados
COMPUTED_FIELDS = frozenset({"original_id", "invoked_by", "local_repo_path", "jenkins_url", "generation_pom"})

_BEANS = {
    "mail": Mail,
    "invoke": Invoke,
    "deploy": Deploy,
    "artifactory": Artifactory,
}

_LISTS = {
    "triggers": ("trigger", Trigger),
    "parameters": ("parameter", Parameter),
    "repositories": ("repository", Repository),
}

_TASK_LISTS = ("tasks", "prebuilders_tasks", "postbuilders_tasks")


@dataclass
class JobTree:
    """Árvore declarativa carregada: settings de geração + jobs não resolvidos."""

    jenkins_url: str
    generation_pom: str
    jobs: List[Job]
    home: Optional[str] = None
    config_hash: str = ""
    document: Dict[str, Any] = field(default_factory=dict, repr=False)


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo de configuração e valida sua estrutura básica.

    Decisões arquiteturais:
        - O arquivo deve existir no momento do carregamento
        - O conteúdo raiz deve ser um dicionário (`dict`)
        - Arquivos vazios são interpretados como dicionários vazios

    Raises:
        DefaultsNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    if not path.exists():
        raise DefaultsNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def load_document(*, defaults_path: str, local_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Carrega o documento efetivo (defaults + overrides locais opcionais).

    Quando presente, o arquivo local sempre tem prioridade sobre defaults.
    """
    effective = _load_file(Path(defaults_path))

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(effective, _load_file(local_file))

    return effective


def _as_list(job_id: str, key: str, value: Any) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise InvalidJobRecordError(f'Job "{job_id}": <{key}> deve ser uma lista')
    return value


def _build_bean(job_id: str, key: str, cls: type, value: Any) -> Any:
    if cls is Repository and isinstance(value, str):
        return Repository(remote=value)
    if not isinstance(value, dict):
        raise InvalidJobRecordError(f'Job "{job_id}": <{key}> deve ser um mapa')
    try:
        return cls(**value)
    except TypeError as e:
        raise InvalidJobRecordError(f'Job "{job_id}": <{key}> inválido: {e}') from e


def _build_task(job_id: str, key: str, value: Any) -> Any:
    if not isinstance(value, dict) or "type" not in value:
        raise InvalidJobRecordError(f'Job "{job_id}": itens de <{key}> precisam declarar `type`')
    attrs = dict(value)
    task_type = attrs.pop("type")
    cls = TASK_TYPES.get(task_type)
    if cls is None:
        raise InvalidJobRecordError(
            f'Job "{job_id}": task type [{task_type}] desconhecido, use um de {sorted(TASK_TYPES)}'
        )
    return _build_bean(job_id, key, cls, attrs)


def build_job(record: Dict[str, Any]) -> Job:
    """
    Converte um registro declarativo em um `Job` não resolvido.

    Raises:
        InvalidJobRecordError: registro malformado ou com chave desconhecida.
        UnknownJobTypeError: `job_type` fora do enum.
        IllegalIdentifierError: `id`/`local_repo` reservados.
    """
    if not isinstance(record, dict):
        raise InvalidJobRecordError(f"Registro de job deve ser um mapa, recebido: {type(record).__name__}")

    data = dict(record)
    job_id = str(data.get("id") or "")
    if not job_id:
        raise InvalidJobRecordError(f"Registro de job sem `id`: {record!r}")
    data["id"] = job_id
    kwargs: Dict[str, Any] = {}

    if "abstract" in data:
        is_abstract = data.pop("abstract")
        if not isinstance(is_abstract, bool):
            raise InvalidJobRecordError(f'Job "{job_id}": <abstract> deve ser booleano, recebido: {is_abstract!r}')
        kwargs["is_abstract"] = is_abstract

    for plural, (singular, cls) in _LISTS.items():
        items = _as_list(job_id, plural, data.pop(plural, None))
        if singular in data:
            items = items + [data.pop(singular)]
        kwargs[plural] = [_build_bean(job_id, plural, cls, item) for item in items]

    for key in _TASK_LISTS:
        if data.get(key) is not None:
            kwargs[key] = [_build_task(job_id, key, item) for item in _as_list(job_id, key, data.pop(key))]

    for key, cls in _BEANS.items():
        if data.get(key) is not None:
            kwargs[key] = _build_bean(job_id, key, cls, data.pop(key))

    if data.get("description_table") is not None:
        rows = _as_list(job_id, "description_table", data.pop("description_table"))
        kwargs["description_table"] = [_build_bean(job_id, "description_table", DescriptionRow, r) for r in rows]

    if data.get("job_type") is not None:
        raw = data.pop("job_type")
        try:
            kwargs["job_type"] = JobType(raw)
        except ValueError as e:
            raise configuration_error(
                UnknownJobTypeError,
                f'Job "{job_id}"',
                "job_type",
                f'Unknown job type [{raw}]. Known types are "{JobType.FREE.value}" and "{JobType.MAVEN.value}"',
                value=raw,
            ) from e

    if data.get("run_post_steps_if_result") is not None:
        raw = data.pop("run_post_steps_if_result")
        try:
            kwargs["run_post_steps_if_result"] = PostStepResult.from_key(raw)
        except KeyError as e:
            raise InvalidJobRecordError(
                f'Job "{job_id}": <run_post_steps_if_result> [{raw}] deve ser um de '
                f"{[m.key for m in PostStepResult]}"
            ) from e

    unknown = sorted(k for k in data if k not in JOB_FIELD_NAMES or k in COMPUTED_FIELDS)
    if unknown:
        raise InvalidJobRecordError(f'Job "{job_id}": chaves desconhecidas {unknown}')

    kwargs.update(data)
    return Job(**kwargs)


def load_job_tree(*, defaults_path: str, local_path: Optional[str] = None) -> JobTree:
    """
    Carrega e materializa a árvore declarativa de jobs.

    Args:
        defaults_path (str): Caminho para o arquivo base.
        local_path (Optional[str]): Caminho opcional para overrides locais.

    Returns:
        JobTree: settings de geração, jobs não resolvidos e hash do documento.

    Raises:
        DefaultsNotFoundError: Se o arquivo de defaults não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        ConfigTypeConflictError: Se ocorrer conflito estrutural durante o merge.
        InvalidJobRecordError: Se algum registro de job for malformado.
    """
    document = load_document(defaults_path=defaults_path, local_path=local_path)

    records = document.get("jobs") or []
    if not isinstance(records, list):
        raise InvalidJobRecordError("<jobs> deve ser uma lista de registros")

    return JobTree(
        jenkins_url=str(document.get("jenkins_url") or ""),
        generation_pom=str(document.get("generation_pom") or ""),
        home=document.get("home"),
        jobs=[build_job(r) for r in records],
        config_hash=compute_config_hash(document),
        document=document,
    )
