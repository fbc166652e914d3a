# src/jobtree/core/config/__init__.py

"""
Camada de configuração do jobtree.

Este pacote contém as estruturas e utilitários responsáveis por carregar,
mesclar, validar estruturalmente e identificar a árvore declarativa de
jobs.

Responsabilidades do pacote:
    - Carregamento de arquivos (defaults + overrides locais)
    - Resolução do documento final via deep-merge determinístico
    - Materialização de registros em `Job`s não resolvidos
    - Geração de hash canônico para rastreabilidade

Limites explícitos:
    - Não executa herança entre jobs (ver `jobtree.core.job.extend`)
    - Não valida completude de jobs (ver `jobtree.core.job.validation`)
"""

from .loader import JobTree, build_job, load_document, load_job_tree
from .merge import deep_merge

__all__ = ["JobTree", "build_job", "deep_merge", "load_document", "load_job_tree"]
