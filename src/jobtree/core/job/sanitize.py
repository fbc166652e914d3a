# src/jobtree/core/job/sanitize.py
"""
Sanitização de identificadores de job.

O `id` de um job (e o `local_repo` de jobs Maven) vira nome de pasta no
workspace do scheduler (`.jenkins/jobs/<id>`), portanto não pode conter
caracteres ilegais nem coincidir com nomes reservados do Windows.

Política (v1):
    - vazio/None → retornado sem alteração
    - nome reservado (case-insensitive) → IllegalIdentifierError
    - cada sequência máxima fora de `[A-Za-z0-9._-]` → um único `-`

Invariantes:
    - A função é pura e determinística
    - sanitize(sanitize(s)) == sanitize(s)

Referências dos nomes ilegais:
    http://msdn.microsoft.com/en-us/library/aa365247%28VS.85%29.aspx
"""

from __future__ import annotations

import re
from typing import Any, FrozenSet, Optional

from ..exceptions import IllegalIdentifierError, configuration_error


ILLEGAL_NAMES: FrozenSet[str] = frozenset(
    [f"com{i}" for i in range(1, 10)]
    + [f"lpt{i}" for i in range(1, 10)]
    + ["con", "nul", "prn"]
)

_ILLEGAL_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def sanitize(raw: Optional[str], title: str, job: Any = None) -> Optional[str]:
    """
    Converte uma string arbitrária em um nome de pasta seguro.

    Args:
        raw: valor original (ex.: id declarado do job).
        title: nome do campo para mensagens de erro (ex.: "Job id").
        job: job dono do valor, usado apenas para diagnóstico.

    Returns:
        O valor sanitizado, ou o próprio `raw` quando vazio/None.

    Raises:
        IllegalIdentifierError: se `raw` for um nome reservado.
    """
    if not raw:
        return raw

    if raw.lower() in ILLEGAL_NAMES:
        raise configuration_error(
            IllegalIdentifierError,
            job if job is not None else raw,
            title,
            f"{title} [{raw}] is illegal! It becomes a folder name and the following "
            f"names are illegal on Windows: {sorted(ILLEGAL_NAMES)}",
            value=raw,
            hint="Renomeie o job/pasta para um nome não reservado.",
        )

    return _ILLEGAL_CHARS.sub("-", raw)
