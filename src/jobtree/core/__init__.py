# src/jobtree/core/__init__.py
"""
Core do jobtree.

Reúne as responsabilidades essenciais para resolver uma árvore de
configurações de job em registros completos e consistentes:

    - config → carregamento, deep-merge e hashing da árvore declarativa
    - job    → entidade Job, herança, reescrita de goals e validação
    - engine → planejamento (pai-antes-de-filho) e resolução da árvore

O core é determinístico e síncrono: a mesma árvore sempre produz os
mesmos jobs resolvidos, ou o mesmo erro.
"""
