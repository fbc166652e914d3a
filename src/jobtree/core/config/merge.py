# src/jobtree/core/config/merge.py
"""
Deep-merge da árvore declarativa (defaults + overrides locais).

Este módulo resolve o documento efetivo a partir de um arquivo de
defaults e de um arquivo local de overrides, ANTES de qualquer herança
entre jobs (esta vive em `jobtree.core.job.extend`).

Política de merge (v1):
    - dict   → merge recursivo por chave
    - `jobs` → merge por `id` (registro do override é mesclado ao registro
               de mesmo id; ids novos são anexados ao final)
    - list   → sobrescrita total (sem merge elemento a elemento)
    - escalar → sobrescrita direta
    - conflito de tipos → erro estrutural explícito

Invariantes:
    - Nenhum input é mutado durante o processo
    - A mesma entrada sempre produz a mesma saída
    - Conflitos estruturais interrompem o merge
"""

from copy import deepcopy
from typing import Any, Dict, List

from .errors import ConfigTypeConflictError


JOBS_KEY = "jobs"


def merge_job_records(base: List[Dict[str, Any]], override: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Mescla listas de registros de job usando `id` como chave.

    A ordem dos registros da base é preservada; registros com ids novos
    entram na ordem do override.

    Raises:
        ConfigTypeConflictError: se algum registro não for dict ou não tiver `id`.
    """
    for record in list(base) + list(override):
        if not isinstance(record, dict) or "id" not in record:
            raise ConfigTypeConflictError(f"Registro de job sem 'id' não pode ser mesclado: {record!r}")

    result: List[Dict[str, Any]] = [deepcopy(r) for r in base]
    index = {r["id"]: i for i, r in enumerate(result)}

    for record in override:
        position = index.get(record["id"])
        if position is None:
            index[record["id"]] = len(result)
            result.append(deepcopy(record))
        else:
            result[position] = deep_merge(result[position], record)

    return result


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Realiza um deep-merge determinístico entre dois documentos.

    Args:
        base (Dict[str, Any]): Documento base (ex.: defaults).
        override (Dict[str, Any]): Overrides explícitos.

    Returns:
        Dict[str, Any]: Novo documento resultante do deep-merge.

    Raises:
        ConfigTypeConflictError: Se ocorrer conflito de tipo entre base e override.
    """

    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, override_value in override.items():
        if key not in result:
            result[key] = deepcopy(override_value)
            continue

        base_value = result[key]

        # dict -> merge recursivo
        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = deep_merge(base_value, override_value)
            continue

        # jobs -> merge por id
        if key == JOBS_KEY and isinstance(base_value, list) and isinstance(override_value, list):
            result[key] = merge_job_records(base_value, override_value)
            continue

        # list -> sobrescrita total
        if isinstance(override_value, list):
            result[key] = deepcopy(override_value)
            continue

        # None é "sem valor" em YAML, aceito contra qualquer tipo
        if base_value is not None and override_value is not None and type(base_value) is not type(override_value):
            raise ConfigTypeConflictError(
                f"Conflito de tipo na chave '{key}': "
                f"{type(base_value).__name__} vs {type(override_value).__name__}"
            )

        # escalar -> sobrescrita
        result[key] = deepcopy(override_value)

    return result
