# tests/core/engine/test_planner_invalid_graph.py
"""
Testes de árvores inválidas no planner de resolução.

Os testes asseguram que:
- ciclos na cadeia de pais são detectados
- pais inexistentes são rejeitados
- ids duplicados (inclusive após sanitização) são rejeitados

Decisões arquiteturais:
    - Nenhum pai é inferido ou criado
    - Erros estruturais são falhas fatais (subclasses de ConfigError)
"""

import pytest

try:
    from jobtree.core.config.errors import ConfigError
    from jobtree.core.engine.planner import (
        CycleDetectedError,
        DuplicateJobIdError,
        UnknownParentError,
        plan_resolution,
    )
except Exception as e:  # noqa: BLE001
    plan_resolution = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que as exceções tipadas do planner estejam disponíveis.

    Limites explícitos:
        - Não valida comportamento do planner
        - Não tenta fallback nem substituição por exceções genéricas
    """
    if _IMPORT_ERR is not None:
        pytest.fail(f"""Missing planner errors. Implement:
- CycleDetectedError
- UnknownParentError
- DuplicateJobIdError
Import error: {_IMPORT_ERR}
""")


def test_cycle_detected(make_job):
    """
    Verifica que o planner detecta ciclos na cadeia de pais.

    Invariantes:
        - Qualquer ciclo invalida a árvore inteira
        - Nenhuma ordenação parcial é retornada
    """
    _require_imports()
    jobs = [
        make_job("a", parent="c"),
        make_job("b", parent="a"),
        make_job("c", parent="b"),
        make_job("free-standing"),
    ]
    with pytest.raises(CycleDetectedError) as exc:
        plan_resolution(jobs)
    assert "['a', 'b', 'c']" in str(exc.value)


def test_self_parent_is_a_cycle(make_job):
    _require_imports()
    with pytest.raises(CycleDetectedError):
        plan_resolution([make_job("a", parent="a")])


def test_unknown_parent(make_job):
    _require_imports()
    with pytest.raises(UnknownParentError):
        plan_resolution([make_job("app", parent="missing")])


def test_duplicate_id_after_sanitize(make_job):
    _require_imports()
    with pytest.raises(DuplicateJobIdError):
        plan_resolution([make_job("my job"), make_job("my/job")])


def test_planner_errors_are_config_errors():
    _require_imports()
    for cls in (CycleDetectedError, DuplicateJobIdError, UnknownParentError):
        assert issubclass(cls, ConfigError)
