# tests/core/job/test_maven_goals.py
"""
Testes da reescrita de `maven_goals`.

Cobre:
- conversão de placeholders `{x}` → `${x}`
- cálculo de `local_repo_path`
- injeção e substituição de `-Dmaven.repo.local`
- conflito com `private_repository`
"""

from pathlib import Path

import pytest

from jobtree.core.exceptions import InternalInvariantError, MisconfiguredFieldError, MissingFieldError
from jobtree.core.job.maven_goals import add_dollar, local_repo_path, update_maven_goals


HOME = "/home/ci"


@pytest.mark.parametrize(
    "goals, expected",
    [
        ("clean install", "clean install"),
        ("-P{profile}", "-P${profile}"),
        ("-Dv={a} -Dw={b}", "-Dv=${a} -Dw=${b}"),
        ("-Dkeep=${already}", "-Dkeep=${already}"),
    ],
)
def test_add_dollar(goals, expected):
    assert add_dollar(goals) == expected


def test_local_repo_path_uses_home_when_base_is_empty():
    assert local_repo_path("", "team", HOME) == "/home/ci/.m2/repository/team"
    assert local_repo_path(None, "team").startswith(str(Path.home()).replace("\\", "/"))


def test_local_repo_path_normalizes_backslashes():
    assert local_repo_path("C:\\repos", "") == "C:/repos/."


def test_goals_without_local_repo_only_get_dollars(maven_job):
    maven_job.maven_goals = "clean deploy -P{env}"

    update_maven_goals(maven_job, HOME)

    assert maven_job.maven_goals == "clean deploy -P${env}"
    assert maven_job.local_repo_path is None


def test_local_repo_argument_is_appended(maven_job):
    maven_job.local_repo = "team"

    update_maven_goals(maven_job, HOME)

    assert maven_job.local_repo_path == "/home/ci/.m2/repository/team"
    assert maven_job.maven_goals == '-B -e clean install -Dmaven.repo.local="/home/ci/.m2/repository/team"'


def test_rewrite_is_idempotent(maven_job):
    maven_job.local_repo_base = "/var/m2"
    maven_job.maven_goals = "clean {goal}"

    update_maven_goals(maven_job, HOME)
    first = maven_job.maven_goals
    update_maven_goals(maven_job, HOME)

    assert maven_job.maven_goals == first == 'clean ${goal} -Dmaven.repo.local="/var/m2/."'
    assert first.count("-Dmaven.repo.local") == 1


def test_existing_local_repo_argument_is_replaced(maven_job):
    maven_job.local_repo = "shared"
    maven_job.maven_goals = "-B -Dmaven.repo.local=/tmp/old clean install"

    update_maven_goals(maven_job, HOME)

    assert maven_job.maven_goals == '-B -Dmaven.repo.local="/home/ci/.m2/repository/shared" clean install'


def test_private_repository_conflicts_with_local_repo(maven_job):
    maven_job.private_repository = True
    maven_job.local_repo = "team"

    with pytest.raises(MisconfiguredFieldError) as exc:
        update_maven_goals(maven_job, HOME)

    assert exc.value.details["field"] == "private_repository"


def test_private_repository_alone_keeps_goals(maven_job):
    maven_job.private_repository = True
    maven_job.maven_goals = "install -P{p}"

    update_maven_goals(maven_job, HOME)

    assert maven_job.maven_goals == "install -P${p}"
    assert maven_job.local_repo_path is None


def test_empty_goals_are_rejected(maven_job):
    maven_job.maven_goals = ""
    with pytest.raises(MissingFieldError):
        update_maven_goals(maven_job, HOME)


def test_free_style_job_is_a_programming_error(free_job):
    with pytest.raises(InternalInvariantError):
        update_maven_goals(free_job, HOME)


def test_base_and_repo_are_joined(maven_job):
    maven_job.local_repo_base = "/opt/m2"
    maven_job.local_repo = "team"
    maven_job.maven_goals = "{foo}"

    update_maven_goals(maven_job, HOME)

    assert maven_job.maven_goals == '${foo} -Dmaven.repo.local="/opt/m2/team"'


def test_bare_local_repo_argument_is_replaced(maven_job):
    maven_job.local_repo = "team"
    maven_job.maven_goals = "clean install -Dmaven.repo.local"

    update_maven_goals(maven_job, HOME)

    assert maven_job.maven_goals == 'clean install -Dmaven.repo.local="/home/ci/.m2/repository/team"'
