# tests/core/engine/test_resolver_fail_fast.py
"""
Testes da política fail-fast do resolver.

Os testes asseguram que:
- o primeiro job inválido interrompe a passada
- a falha é registrada no contexto (`job.failed`) com payload canônico
- jobs posteriores no plano não são resolvidos
- falhas inesperadas também são registradas antes de propagar
"""

import pytest

from jobtree import ConfigurationError
from jobtree.core.engine.planner import UnknownParentError
from jobtree.core.engine.resolver import resolve_jobs
from jobtree.core.exceptions import MissingFieldError, RepositoryDuplicatedError
from jobtree.core.job.beans import Repository
from jobtree.core.job.types import JobType


def _resolve(jobs, ctx):
    return resolve_jobs(jobs, jenkins_url="http://ci", generation_pom="pom.xml", ctx=ctx)


def test_first_invalid_job_stops_the_pass(make_job, ctx):
    broken = make_job("a-broken", description="Broken", job_type=JobType.FREE)
    ok = make_job("b-ok", description="Ok")

    with pytest.raises(MissingFieldError):
        _resolve([broken, ok], ctx)

    failed = ctx.events_for("a-broken")[-1]
    assert failed["level"] == "ERROR"
    assert failed["message"] == "job.failed"
    assert failed["error"]["type"] == "JOB_MISSING_FIELD"
    assert failed["error"]["details"] == {"job": 'Job "a-broken"', "field": "tasks"}

    assert ctx.events_for("b-ok") == []


def test_configuration_errors_share_a_base(make_job, ctx):
    job = make_job(
        "app",
        description="App",
        repositories=[Repository(remote="svn://x/a"), Repository(remote="svn://x/a")],
    )

    with pytest.raises(ConfigurationError) as exc:
        _resolve([job], ctx)

    assert isinstance(exc.value, RepositoryDuplicatedError)


def test_unexpected_error_is_logged_and_propagated(make_job, ctx):
    job = make_job("odd", description="Odd", job_type=JobType.FREE, tasks=["not-a-task"])

    with pytest.raises(AttributeError):
        _resolve([job], ctx)

    failed = ctx.events_for("odd")[-1]
    assert failed["message"] == "job.failed"
    assert failed["error"]["type"] == "RESOLUTION_UNEXPECTED_ERROR"
    assert failed["error"]["details"]["exc_type"] == "AttributeError"


def test_structural_errors_happen_before_any_merge(make_job, ctx):
    with pytest.raises(UnknownParentError):
        _resolve([make_job("root", description="R"), make_job("leaf", parent="nope")], ctx)

    assert ctx.events == []
