import pytest
from pydantic import ValidationError
from gitlab_roulette.models.entities import (
    Issue,
    Member,
    Milestone,
    Project,
    ProjectSnapshot,
    Assignment,
    AssignmentPair,
    SelectionStrategy,
)

@pytest.fixture
def milestone():
    """Fixture para milestone de teste"""
    return Milestone(id=10, project_id=1, title="v1.0", description="Primeira versão", state="active")

@pytest.fixture
def members():
    """Fixture para membros do projeto"""
    return [
        Member(id=1, username="alice", name="Alice"),
        Member(id=2, username="bob", name="Bob"),
    ]

@pytest.fixture
def snapshot(milestone):
    """Fixture para retrato do projeto"""
    other = Milestone(id=20, project_id=1, title="v2.0", state="active")
    issues = [
        Issue(id=101, iid=1, title="Issue 1", state="opened", milestone=milestone),
        Issue(id=102, iid=2, title="Issue 2", state="opened"),
        Issue(id=103, iid=3, title="Issue 3", state="opened", milestone=other),
        Issue(id=104, iid=4, title="Issue 4", state="opened", milestone=milestone),
    ]
    project = Project(id=1, name="Roleta", path_with_namespace="time/roleta", web_url="https://gitlab.example.com/time/roleta")
    return ProjectSnapshot(project=project, issues=issues, members=[])

def test_labels(milestone, members):
    """Testa os rótulos exibidos nos menus"""
    issue = Issue(id=101, iid=7, title="Corrigir login", state="opened")

    assert issue.to_label() == "#7: Corrigir login"
    assert members[0].to_label() == "Alice (alice)"
    assert milestone.to_label() == "%10: v1.0"
    assert SelectionStrategy.RANGE.to_label() == "Range"

def test_milestone_equality_by_id():
    """Testa que milestones são iguais apenas pelo id"""
    a = Milestone(id=1, title="Sprint", description="mesma", state="active")
    b = Milestone(id=1, title="Outro título", description="outra", state="closed")
    c = Milestone(id=2, title="Sprint", description="mesma", state="active")

    assert a == b
    assert hash(a) == hash(b)
    assert a != c
    assert len({a, b, c}) == 2

def test_issue_is_immutable():
    """Testa que a issue não pode ser alterada depois de criada"""
    issue = Issue(id=1, iid=1, title="Issue", state="opened")

    with pytest.raises(ValidationError):
        issue.title = "Outro"

def test_issue_from_gitlab_payload():
    """Testa a criação de uma issue a partir do JSON do GitLab, ignorando campos extras"""
    issue = Issue.model_validate({
        "id": 5,
        "iid": 2,
        "project_id": 1,
        "title": "Issue",
        "description": None,
        "state": "opened",
        "type": "ISSUE",
        "labels": ["bug"],
        "assignees": [{"id": 1, "username": "alice", "name": "Alice", "state": "active"}],
        "milestone": None,
    })

    assert issue.milestone is None
    assert issue.assignees[0].username == "alice"

def test_snapshot_milestones_dedup_first_seen(snapshot):
    """Testa que as milestones são distintas e na ordem em que aparecem"""
    milestones = snapshot.milestones()

    assert [m.id for m in milestones] == [10, 20]

def test_snapshot_find_issue(snapshot):
    """Testa a busca de issue pelo id"""
    assert snapshot.find_issue(103).iid == 3
    assert snapshot.find_issue(999) is None
    assert snapshot.has_issue(101)
    assert not snapshot.has_issue(1)

def test_assignment_counts_include_members_without_issues(members):
    """Testa a contagem por membro incluindo membros sem issues"""
    issue = Issue(id=1, iid=1, title="Issue", state="opened")
    assignment = Assignment(members=members, pairs=[AssignmentPair(issue=issue, member=members[1])])

    assert len(assignment) == 1
    assert assignment.counts_by_member() == {1: 0, 2: 1}
    assert assignment.issues_for(members[1]) == [issue]
    assert assignment.issues == [issue]
