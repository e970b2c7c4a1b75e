# tests/services/test_versioning_service.py
import pytest

from blueprint.config import settings
from blueprint.database import commit_or_raise
from blueprint.errors import ConstraintViolation, NotFoundError, ValidationError
from blueprint.models import Document, DocumentType, Version, VersionStatus
from blueprint.services import versioning_service


def test_new_document_has_single_draft_version(db_session, sample_document):
    versions = versioning_service.list_versions(db_session, sample_document.id)

    assert len(versions) == 1
    assert versions[0].version_number == 1
    assert versions[0].status == VersionStatus.DRAFT
    assert versions[0].content == "First draft"
    assert versions[0].commit_message == "Initial version"
    assert versions[0].committed_at is not None

def test_create_document_accepts_raw_type(db_session, sample_project):
    document = versioning_service.create_document(
        db_session, sample_project.id, "Endpoints", "GET /", "api"
    )
    assert document.document_type == DocumentType.API

def test_create_document_invalid_type_persists_nothing(db_session, sample_project):
    with pytest.raises(ValidationError, match="document_type"):
        versioning_service.create_document(
            db_session, sample_project.id, "Spec", "v1", "invalid"
        )

    assert db_session.query(Document).count() == 0
    assert db_session.query(Version).count() == 0

def test_create_document_blank_title(db_session, sample_project):
    with pytest.raises(ValidationError, match="title"):
        versioning_service.create_document(db_session, sample_project.id, "", "v1")

def test_create_document_unknown_project(db_session, tables):
    with pytest.raises(NotFoundError):
        versioning_service.create_document(db_session, 404, "Spec", "v1")

@pytest.mark.parametrize("commits", [1, 3, 7])
def test_version_numbers_are_contiguous(db_session, sample_document, commits):
    numbers = [
        versioning_service.create_new_version(db_session, sample_document.id, f"commit {i}").version_number
        for i in range(commits)
    ]

    assert numbers == list(range(2, commits + 2))

def test_new_version_snapshots_live_content(db_session, sample_document):
    versioning_service.update_document(db_session, sample_document.id, content="Second draft")
    version = versioning_service.create_new_version(db_session, sample_document.id, "edit one")

    assert version.status == VersionStatus.COMMITTED
    assert version.content == "Second draft"
    assert version.commit_message == "edit one"

def test_versions_are_frozen_after_edits(db_session, sample_document, committed_version):
    versioning_service.update_document(db_session, sample_document.id, content="Third draft")

    contents = {v.version_number: v.content for v in versioning_service.list_versions(db_session, sample_document.id)}
    assert contents == {1: "First draft", 2: "First draft"}

@pytest.mark.parametrize("message", [None, "", "   "])
def test_default_commit_message(db_session, sample_document, message):
    version = versioning_service.create_new_version(db_session, sample_document.id, message)
    assert version.commit_message == "Version update"

def test_create_new_version_unknown_document(db_session, tables):
    with pytest.raises(NotFoundError):
        versioning_service.create_new_version(db_session, 404)

def test_current_version(db_session, sample_document, committed_version):
    current = versioning_service.current_version(db_session, sample_document)

    assert current.id == committed_version.id
    assert sample_document.current_version.id == committed_version.id
    assert sample_document.version_count == 2

def test_duplicate_version_number_is_constraint_violation(db_session, sample_document):
    db_session.add(Version(
        document_id=sample_document.id,
        version_number=1,
        content="clash",
        status=VersionStatus.COMMITTED
    ))

    with pytest.raises(ConstraintViolation):
        commit_or_raise(db_session)

    assert len(versioning_service.list_versions(db_session, sample_document.id)) == 1

def test_concurrent_commit_race_surfaces_constraint_violation(db_session, sample_document, monkeypatch):
    """A stale read of the max version number loses against the unique constraint"""
    monkeypatch.setattr(versioning_service, "next_version_number", lambda db, document: 1)

    with pytest.raises(ConstraintViolation):
        versioning_service.create_new_version(db_session, sample_document.id, "racing")

def test_deploy_is_idempotent(db_session, committed_version):
    first = versioning_service.deploy_version(db_session, committed_version.id)
    deployed_at = first.committed_at
    second = versioning_service.deploy_version(db_session, committed_version.id)

    assert second.status == VersionStatus.DEPLOYED
    assert second.committed_at == deployed_at

def test_rollback_requires_deployment(db_session, committed_version):
    version = versioning_service.rollback_version(db_session, committed_version.id)
    assert version.status == VersionStatus.COMMITTED

def test_rollback_deployed_version(db_session, committed_version):
    versioning_service.deploy_version(db_session, committed_version.id)
    version = versioning_service.rollback_version(db_session, committed_version.id)

    assert version.status == VersionStatus.ROLLED_BACK

def test_rolled_back_version_can_be_redeployed(db_session, committed_version):
    versioning_service.deploy_version(db_session, committed_version.id)
    versioning_service.rollback_version(db_session, committed_version.id)
    version = versioning_service.deploy_version(db_session, committed_version.id)

    assert version.status == VersionStatus.DEPLOYED

def test_multiple_deployed_versions_allowed_by_default(db_session, sample_document, committed_version):
    first = versioning_service.list_versions(db_session, sample_document.id)[-1]
    versioning_service.deploy_version(db_session, first.id)
    versioning_service.deploy_version(db_session, committed_version.id)

    deployed = versioning_service.list_versions(db_session, sample_document.id, status=VersionStatus.DEPLOYED)
    assert [v.version_number for v in deployed] == [2, 1]

def test_single_deployment_demotes_previous(db_session, sample_document, committed_version, single_deployment):
    first = versioning_service.list_versions(db_session, sample_document.id)[-1]
    versioning_service.deploy_version(db_session, first.id)
    versioning_service.deploy_version(db_session, committed_version.id)

    statuses = {v.version_number: v.status for v in versioning_service.list_versions(db_session, sample_document.id)}
    assert statuses == {1: VersionStatus.ROLLED_BACK, 2: VersionStatus.DEPLOYED}

def test_single_deployment_redeploy_demotes_earlier_deployments(db_session, sample_document, committed_version, monkeypatch):
    first = versioning_service.list_versions(db_session, sample_document.id)[-1]
    versioning_service.deploy_version(db_session, first.id)
    second = versioning_service.deploy_version(db_session, committed_version.id)
    deployed_at = second.committed_at

    monkeypatch.setattr(settings, "ENFORCE_SINGLE_DEPLOYMENT", True)
    version = versioning_service.deploy_version(db_session, committed_version.id)

    assert version.status == VersionStatus.DEPLOYED
    assert version.committed_at == deployed_at
    deployed = versioning_service.list_versions(db_session, sample_document.id, status=VersionStatus.DEPLOYED)
    assert [v.version_number for v in deployed] == [2]
    assert db_session.get(Version, first.id).status == VersionStatus.ROLLED_BACK

def test_deploy_unknown_version(db_session, tables):
    with pytest.raises(NotFoundError):
        versioning_service.deploy_version(db_session, 404)
    with pytest.raises(NotFoundError):
        versioning_service.rollback_version(db_session, 404)

def test_list_versions_invalid_status(db_session, sample_document):
    with pytest.raises(ValidationError):
        versioning_service.list_versions(db_session, sample_document.id, status="archived")

def test_update_document_validates(db_session, sample_document):
    with pytest.raises(ValidationError):
        versioning_service.update_document(db_session, sample_document.id, title=" ")
    with pytest.raises(ValidationError):
        versioning_service.update_document(db_session, sample_document.id, document_type="essay")

def test_delete_document_cascades(db_session, sample_document, committed_version):
    versioning_service.delete_document(db_session, sample_document.id)

    assert db_session.query(Document).count() == 0
    assert db_session.query(Version).count() == 0

def test_list_documents_by_type(db_session, sample_project, sample_document):
    versioning_service.create_document(db_session, sample_project.id, "Cart", "", DocumentType.FEATURE)

    features = versioning_service.list_documents(db_session, sample_project.id, document_type="feature")
    assert [d.title for d in features] == ["Cart"]
    assert len(versioning_service.list_documents(db_session, sample_project.id)) == 2
