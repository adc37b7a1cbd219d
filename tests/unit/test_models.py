"""Tests for domain models (payload parsing and parameter rendering)."""
from core.domain.models import (
    AddCommentParams,
    AddIssueParams,
    Issue,
    IssueType,
    LinkSharedFileParams,
    ProjectInfo,
    SpaceInfo,
)
from tests.conftest import ISSUE, ISSUE_TYPE, PROJECT, SPACE


def test_space_info_from_camel_case():
    space = SpaceInfo.model_validate(SPACE)

    assert space.space_key == "EXAMPLE"
    assert space.owner_id == 1
    assert space.report_send_time == "08:00:00"


def test_project_flags():
    project = ProjectInfo.model_validate(PROJECT)

    assert project.project_key == "TEST"
    assert project.project_leader_can_edit_project_leader is False
    assert project.use_original_image_size_at_wiki is False
    assert project.use_dev_attributes is True


def test_issue_nests_references_and_ignores_unknown_fields():
    issue = Issue.model_validate(ISSUE)

    assert issue.issue_key == "TEST-1"
    assert issue.issue_type.name == "Bug"
    assert issue.priority.name == "Normal"
    assert issue.status.name == "Open"
    assert not hasattr(issue, "assignee")


def test_issue_type_templates_nullable():
    issue_type = IssueType.model_validate(ISSUE_TYPE)
    assert issue_type.template_summary is None
    assert issue_type.template_description is None


def test_dump_by_alias_matches_remote_shape():
    assert SpaceInfo.model_validate(SPACE).model_dump(by_alias=True) == SPACE


def test_add_issue_params_drop_unset_optionals():
    params = AddIssueParams(project_id=1, issue_type_id=2, priority_id=3, due_date="2024-01-31")

    assert params.to_query_params() == {
        "projectId": 1,
        "issueTypeId": 2,
        "priorityId": 3,
        "dueDate": "2024-01-31",
    }


def test_add_comment_params_use_array_keys():
    params = AddCommentParams(notified_user_ids=[10, 11], attachment_ids=[5])

    assert params.to_query_params() == {"notifiedUserId[]": [10, 11], "attachmentId[]": [5]}


def test_link_shared_file_params_accept_alias():
    params = LinkSharedFileParams.model_validate({"fileId[]": [7, 8]})
    assert params.file_ids == [7, 8]
