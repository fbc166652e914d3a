# src/jobtree/core/engine/planner.py
"""
Planejador da resolução (ordem pai-antes-de-filho).

O motor de herança assume que o pai já está resolvido quando um filho é
estendido. Este módulo valida a árvore declarativa e produz uma ordem
linear determinística em que todo job aparece depois do seu pai.

Decisões arquiteturais:
    - Utiliza ordenação topológica determinística (Kahn modificado)
    - Empates são resolvidos por ordem lexicográfica de `job.id`
    - Referências a `parent` aceitam o id declarado ou o id sanitizado
    - Erros estruturais são tratados como falhas fatais

Invariantes:
    - Nenhum job aparece antes do seu pai
    - Todos os jobs aparecem exatamente uma vez
    - A mesma árvore produz sempre a mesma ordem

Limites explícitos:
    - Não executa merge nem validação
    - Não registra eventos de rastreabilidade
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from ..config.errors import ConfigError
from ..job.model import Job


class DuplicateJobIdError(ConfigError):
    """Dois jobs resolvem para o mesmo `id` (após sanitização)."""


class UnknownParentError(ConfigError):
    """
    Um job referencia um `parent` inexistente na árvore.

    Todas as referências devem ser explícitas e resolvíveis; nenhum pai
    é inferido ou criado.
    """


class CycleDetectedError(ConfigError):
    """
    A cadeia de pais forma um ciclo (ex.: a → b → a).

    Nenhuma ordem de herança válida existe nesta condição.
    """


def index_jobs(jobs: Iterable[Job]) -> Dict[str, Job]:
    """
    Indexa jobs por `id` sanitizado.

    Raises:
        DuplicateJobIdError: se dois jobs possuírem o mesmo `id`.
    """
    by_id: Dict[str, Job] = {}
    for job in jobs:
        if job.id in by_id:
            raise DuplicateJobIdError(
                f"Duplicate job id: {job.id} ({by_id[job.id]} and {job})"
            )
        by_id[job.id] = job
    return by_id


def find_parent(job: Job, by_id: Dict[str, Job]) -> Optional[Job]:
    """
    Retorna o pai declarado do job, ou None para jobs raiz.

    Raises:
        UnknownParentError: se `job.parent` não corresponder a nenhum job.
    """
    if not job.parent:
        return None

    parent = by_id.get(job.parent)
    if parent is None:
        parent = next((j for j in by_id.values() if j.original_id == job.parent), None)
    if parent is None:
        raise UnknownParentError(f"[{job}] has unknown parent [{job.parent}]")
    return parent


def plan_resolution(jobs: Iterable[Job]) -> List[Job]:
    """
    Valida e produz a ordem de resolução pai-antes-de-filho.

    Args:
        jobs (Iterable[Job]): Jobs declarativos (ainda não resolvidos).

    Returns:
        List[Job]: Jobs em ordem topológica determinística.

    Raises:
        DuplicateJobIdError: Se dois jobs possuírem o mesmo `id`.
        UnknownParentError: Se um job declarar pai inexistente.
        CycleDetectedError: Se houver ciclo na cadeia de pais.
    """
    by_id = index_jobs(jobs)

    parent_of: Dict[str, Optional[str]] = {}
    children: Dict[str, List[str]] = {jid: [] for jid in by_id}
    for jid, job in by_id.items():
        parent = find_parent(job, by_id)
        parent_of[jid] = parent.id if parent is not None else None
        if parent is not None:
            children[parent.id].append(jid)

    ready: List[str] = sorted(jid for jid, pid in parent_of.items() if pid is None)
    order_ids: List[str] = []

    while ready:
        jid = ready.pop(0)  # menor lexicográfico
        order_ids.append(jid)
        ready.extend(children[jid])
        ready.sort()

    if len(order_ids) != len(by_id):
        stuck = sorted(set(by_id) - set(order_ids))
        raise CycleDetectedError(f"Cycle detected in job parent chain: {stuck}")

    return [by_id[jid] for jid in order_ids]
