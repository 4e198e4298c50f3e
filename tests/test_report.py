import io
import json
import pytest
from rich.console import Console
from gitlab_roulette.models.entities import Assignment, AssignmentPair, Issue, Member, Project
from gitlab_roulette.services.report import AssignmentReport

@pytest.fixture
def project():
    """Fixture para projeto"""
    return Project(id=1, name="Roleta", path_with_namespace="time/roleta", web_url="https://gitlab.example.com/time/roleta")

@pytest.fixture
def assignment():
    """Fixture para distribuição com um membro sem issues"""
    alice = Member(id=1, username="alice", name="Alice")
    bob = Member(id=2, username="bob", name="Bob")
    carol = Member(id=3, username="carol", name="Carol")
    pairs = [
        AssignmentPair(issue=Issue(id=11, iid=1, title="Login", state="opened"), member=bob),
        AssignmentPair(issue=Issue(id=12, iid=2, title="Logout", state="opened"), member=alice),
    ]
    return Assignment(members=[alice, bob, carol], pairs=pairs)

@pytest.fixture
def report(assignment, project):
    """Fixture para o relatório"""
    return AssignmentReport(assignment, project)

def test_render_preview_in_execution_order(report):
    """Testa que a pré-visualização segue a ordem de execução"""
    console = Console(file=io.StringIO(), width=120)

    report.render(console)

    output = console.file.getvalue()
    assert output.index("#1: Login") < output.index("#2: Logout")
    assert "Bob (bob)" in output
    assert "Carol (carol)" in output

def test_preview_table_rows(report):
    """Testa a quantidade de linhas das tabelas"""
    assert report.preview_table().row_count == 2
    assert report.summary_table().row_count == 3

def test_to_dict(report):
    """Testa o conteúdo do relatório"""
    data = report.to_dict()

    assert data["project"] == "time/roleta"
    assert [a["issue_iid"] for a in data["assignments"]] == [1, 2]
    assert data["counts"] == {"alice": 1, "bob": 1, "carol": 0}

def test_save(report, tmp_path):
    """Testa a gravação do relatório em JSON"""
    path = report.save(tmp_path / "output")

    assert path.exists()
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["assignments"][0]["username"] == "bob"
