# src/jobtree/core/engine/resolver.py
"""
Resolver — executa a passada completa sobre uma árvore de jobs.

Para cada job, na ordem produzida pelo planner:
    1. carimba os settings de geração (`jenkins_url`, `generation_pom`)
    2. `extend` contra o pai já resolvido (ou contra um pai vazio, para
       que jobs raiz recebam os defaults da tabela de regras)
    3. `update_maven_goals` para jobs Maven não abstratos
    4. `verify_all`

Política de execução:
    - fail-fast: o primeiro job inválido interrompe a passada; o erro é
      registrado no contexto antes de ser propagado
    - jobs abstratos são resolvidos (para servirem de pai) mas não são
      entregues ao renderer

Invariantes:
    - Nenhum job é estendido antes do seu pai
    - Todo job retornado está no estado "validated"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ..config.hashing import compute_job_fingerprint
from ..config.loader import JobTree
from ..errors import resolution_unexpected_error
from ..exceptions import JobException
from ..job.extend import extend, shadowed_parameters
from ..job.maven_goals import update_maven_goals
from ..job.model import Job
from ..job.types import JobType
from ..job.validation import verify_all
from ..resolution_context import ResolutionContext
from .planner import find_parent, index_jobs, plan_resolution


ROOT_PARENT_ID = "defaults"


@dataclass
class ResolutionResult:
    """
    Resultado de uma passada de resolução.

    - jobs: jobs validados e renderizáveis (não abstratos), em ordem de plano
    - merged: todos os jobs resolvidos por id, incluindo abstratos
    - fingerprints: hash canônico de cada job renderizável
    """

    jobs: List[Job]
    merged: Dict[str, Job] = field(default_factory=dict)
    fingerprints: Dict[str, str] = field(default_factory=dict)


class JobResolver:
    def __init__(self, jobs: Iterable[Job], ctx: ResolutionContext):
        self.jobs = list(jobs)
        self.ctx = ctx

    def _resolve_one(self, job: Job, parent: Optional[Job]) -> None:
        if job.jenkins_url is None:
            job.jenkins_url = self.ctx.jenkins_url
        if job.generation_pom is None:
            job.generation_pom = self.ctx.generation_pom

        source = parent if parent is not None else Job(id=ROOT_PARENT_ID)

        for name in shadowed_parameters(source.parameters, job.parameters):
            self.ctx.add_warning(
                job_id=job.id,
                message=f"parameter [{name}] overrides the one inherited from [{source}]",
            )

        extend(job, source)
        self.ctx.log(job_id=job.id, level="INFO", message="job.merged", parent=source.id if parent else None)

        if parent is None and not job.is_abstract and job.description == "&nbsp;":
            self.ctx.add_warning(job_id=job.id, message="root job declares no <description>")

        # abstratos param em "merged": filhos herdam os goals ainda não reescritos
        if job.job_type == JobType.MAVEN and not job.is_abstract:
            update_maven_goals(job, self.ctx.home)
            self.ctx.log(job_id=job.id, level="INFO", message="job.goals_rewritten", maven_goals=job.maven_goals)

        verify_all(job)

    def _link_invocations(self, by_id: Dict[str, Job]) -> None:
        for job in by_id.values():
            if job.is_abstract or job.invoke is None:
                continue
            for target_id in job.invoke.job_ids():
                target = by_id.get(target_id)
                if target is None:
                    self.ctx.add_warning(job_id=job.id, message=f"invoked job [{target_id}] is not defined")
                    continue
                if job.id not in target.invoked_by:
                    target.invoked_by.append(job.id)

    def resolve(self) -> ResolutionResult:
        ordered = plan_resolution(self.jobs)
        by_id = index_jobs(ordered)

        for job in ordered:
            parent = find_parent(job, by_id)
            try:
                self._resolve_one(job, parent)
            except JobException as e:
                self.ctx.log(job_id=job.id, level="ERROR", message="job.failed", error=e.to_payload().to_dict())
                raise
            except Exception as e:
                payload = resolution_unexpected_error(
                    job=str(job), exc_type=e.__class__.__name__, exc_message=str(e)
                )
                self.ctx.log(job_id=job.id, level="ERROR", message="job.failed", error=payload.to_dict())
                raise

        self._link_invocations(by_id)

        result = ResolutionResult(jobs=[j for j in ordered if not j.is_abstract], merged=dict(by_id))
        for job in result.jobs:
            fingerprint = compute_job_fingerprint(job)
            result.fingerprints[job.id] = fingerprint
            self.ctx.log(job_id=job.id, level="INFO", message="job.validated", fingerprint=fingerprint)

        return result


def resolve_jobs(
    jobs: Iterable[Job],
    *,
    jenkins_url: str,
    generation_pom: str,
    home: Optional[str] = None,
    ctx: Optional[ResolutionContext] = None,
) -> ResolutionResult:
    """Resolve uma coleção de jobs declarativos (merge → reescrita → validação)."""
    if ctx is None:
        ctx = ResolutionContext(jenkins_url=jenkins_url, generation_pom=generation_pom, home=home)
    return JobResolver(jobs, ctx).resolve()


def resolve_tree(tree: JobTree, ctx: Optional[ResolutionContext] = None) -> ResolutionResult:
    """Resolve uma árvore carregada por `load_job_tree`."""
    if ctx is None:
        ctx = ResolutionContext(
            jenkins_url=tree.jenkins_url,
            generation_pom=tree.generation_pom,
            home=tree.home,
            config_hash=tree.config_hash,
        )
    return JobResolver(tree.jobs, ctx).resolve()
