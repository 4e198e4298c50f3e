from typing import Dict, List, Optional
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field

class SelectionStrategy(str, Enum):
    """Formas disponíveis para selecionar as issues"""
    MILESTONE = "Milestone"
    RANGE = "Range"
    MANUAL = "Manual"

    def to_label(self) -> str:
        return self.value

class Project(BaseModel):
    """Modelo de um projeto do GitLab"""
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    path_with_namespace: str
    web_url: str

    def to_label(self) -> str:
        return self.path_with_namespace

class Member(BaseModel):
    """Modelo de um membro do projeto"""
    model_config = ConfigDict(frozen=True)

    id: int
    username: str
    name: str

    def to_label(self) -> str:
        return f"{self.name} ({self.username})"

class Milestone(BaseModel):
    """Modelo de uma milestone"""
    model_config = ConfigDict(frozen=True)

    id: int
    project_id: Optional[int] = None
    title: str
    description: Optional[str] = None
    state: str

    def to_label(self) -> str:
        return f"%{self.id}: {self.title}"

    def __hash__(self) -> int:
        """Retorna o hash da milestone baseado apenas no id"""
        return hash(self.id)

    def __eq__(self, other: object) -> bool:
        """Compara duas milestones pelo id, nunca pelo conteúdo"""
        if not isinstance(other, Milestone):
            return NotImplemented
        return self.id == other.id

class Issue(BaseModel):
    """Modelo de uma issue"""
    model_config = ConfigDict(frozen=True)

    id: int
    iid: int
    project_id: Optional[int] = None
    title: str
    description: Optional[str] = None
    state: str
    type: str = "ISSUE"
    milestone: Optional[Milestone] = None
    assignees: List[Member] = Field(default_factory=list)

    def to_label(self) -> str:
        return f"#{self.iid}: {self.title}"

class ProjectSnapshot(BaseModel):
    """Retrato imutável das issues e membros de um projeto, obtido uma vez por execução"""
    model_config = ConfigDict(frozen=True)

    project: Project
    issues: List[Issue] = Field(default_factory=list)
    members: List[Member] = Field(default_factory=list)

    def milestones(self) -> List[Milestone]:
        """
        Retorna as milestones distintas referenciadas pelas issues

        Returns:
            List[Milestone]: Milestones na ordem em que aparecem pela primeira vez
        """
        milestones: List[Milestone] = []
        for issue in self.issues:
            if issue.milestone is not None and issue.milestone not in milestones:
                milestones.append(issue.milestone)
        return milestones

    def find_issue(self, issue_id: int) -> Optional[Issue]:
        """Retorna a issue com o id informado, se existir"""
        return next((i for i in self.issues if i.id == issue_id), None)

    def has_issue(self, issue_id: int) -> bool:
        return self.find_issue(issue_id) is not None

class AssignmentPair(BaseModel):
    """Uma issue e o membro sorteado para ela"""
    model_config = ConfigDict(frozen=True)

    issue: Issue
    member: Member

class Assignment(BaseModel):
    """Distribuição calculada das issues selecionadas entre os membros"""
    model_config = ConfigDict(frozen=True)

    members: List[Member] = Field(default_factory=list)
    pairs: List[AssignmentPair] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.pairs)

    @property
    def issues(self) -> List[Issue]:
        return [pair.issue for pair in self.pairs]

    def counts_by_member(self) -> Dict[int, int]:
        """Retorna a quantidade de issues por id de membro, incluindo quem ficou sem nenhuma"""
        counts = {member.id: 0 for member in self.members}
        for pair in self.pairs:
            counts[pair.member.id] = counts.get(pair.member.id, 0) + 1
        return counts

    def issues_for(self, member: Member) -> List[Issue]:
        """Retorna as issues atribuídas a um membro"""
        return [pair.issue for pair in self.pairs if pair.member.id == member.id]
