# tests/test_smoke.py
"""
Testes de sanidade estrutural (smoke tests) do jobtree.

Este módulo contém testes mínimos cujo único objetivo é garantir que:
- o pacote pode ser importado sem falhas estruturais
- o ambiente de testes (pytest) está funcional

Invariantes:
    - Estes testes devem sempre passar em um setup correto
    - Não dependem de configuração nem de filesystem

Limites explícitos:
    - Não testar lógica de negócio
    - Não acumular asserts funcionais
"""


def test_smoke():
    """
    Smoke test mínimo do repositório.

    Valida que a API pública do pacote é importável. Não valida
    comportamento de merge, reescrita ou validação.
    """
    import jobtree

    for name in jobtree.__all__:
        assert hasattr(jobtree, name), name
