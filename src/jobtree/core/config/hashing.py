# src/jobtree/core/config/hashing.py
"""
Hashing canônico do jobtree.

Gera identidades estruturais determinísticas para:
    - o documento efetivo da árvore (defaults + overrides)
    - cada job validado (fingerprint entregue junto ao renderer, que pode
      pular a regravação de jobs cujo fingerprint não mudou)

Política de hashing (v1):
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Codificação UTF-8
    - SHA-256

Invariantes:
    - Estruturas equivalentes produzem o mesmo hash
    - O valor gerado é sempre uma string hexadecimal de 64 caracteres
"""


import json
import hashlib
from typing import Any, Dict


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera um hash determinístico de um documento (dict) serializável.

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """

    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        config,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()


def compute_job_fingerprint(job: Any) -> str:
    """Fingerprint de um job resolvido, a partir de `job.to_dict()`."""
    return compute_config_hash(job.to_dict())
