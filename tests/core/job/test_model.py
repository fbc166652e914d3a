# tests/core/job/test_model.py
import pytest

from jobtree.core.exceptions import IllegalIdentifierError, MissingFieldError, UnknownScmTypeError
from jobtree.core.job.model import Job
from jobtree.core.job.tasks import Shell
from jobtree.core.job.types import SCM_CLASSES, JobType, PostStepResult


def test_id_is_sanitized_and_original_kept():
    job = Job(id="My Job/1")
    assert job.id == "My-Job-1"
    assert job.original_id == "My Job/1"
    assert str(job) == 'Job "My Job/1"'


@pytest.mark.parametrize("raw", ["", "   "])
def test_empty_id_is_rejected(raw):
    with pytest.raises(MissingFieldError):
        Job(id=raw)


def test_reserved_id_is_rejected():
    with pytest.raises(IllegalIdentifierError):
        Job(id="CON")


def test_local_repo_is_sanitized_on_construction():
    job = Job(id="app", local_repo="team repo")
    assert job.local_repo == "team-repo"


def test_scm_class_table():
    assert dict(SCM_CLASSES) == {
        "none": "hudson.scm.NullSCM",
        "cvs": "hudson.scm.CVSSCM",
        "svn": "hudson.scm.SubversionSCM",
        "git": "hudson.plugins.git.GitSCM",
    }
    assert Job(id="a", scm_type="git").scm_class == "hudson.plugins.git.GitSCM"


def test_unknown_scm_type_raises():
    with pytest.raises(UnknownScmTypeError) as exc:
        _ = Job(id="a", scm_type="hg").scm_class
    assert exc.value.details["value"] == "hg"


def test_post_step_result_members():
    assert PostStepResult.ALL.threshold == "FAILURE"
    assert PostStepResult.ALL.color == "RED"
    assert [m.severity for m in PostStepResult] == [0, 1, 2]
    assert PostStepResult.from_key("unstable") is PostStepResult.UNSTABLE
    with pytest.raises(KeyError):
        PostStepResult.from_key("failure")


def test_to_dict_is_json_friendly():
    job = Job(
        id="a",
        job_type=JobType.FREE,
        run_post_steps_if_result=PostStepResult.SUCCESS,
        tasks=[Shell(command="make")],
    )
    data = job.to_dict()
    assert data["job_type"] == "free"
    assert data["run_post_steps_if_result"] == "success"
    assert data["tasks"] == [{"type": "Shell", "command": "make"}]
