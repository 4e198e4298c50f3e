from typing import List, Optional, Type, TypeVar
import requests
from pydantic import BaseModel, TypeAdapter, ValidationError
from loguru import logger

from ..errors import ParseError, TransportError
from ..models.config import RouletteConfig
from ..models.entities import Issue, Member, Project, ProjectSnapshot

T = TypeVar("T", bound=BaseModel)


class GitLabClient:
    """Cliente para integração com a API REST do GitLab"""

    def __init__(self, config: RouletteConfig, session: Optional[requests.Session] = None, timeout: float = 30):
        """
        Inicializa o cliente do GitLab

        Args:
            config: Configuração com a URL do projeto e o token
            session: Sessão HTTP a reutilizar (útil em testes)
            timeout: Tempo limite das requisições, em segundos
        """
        self.url = config.url
        self.base_url = f"{config.gitlab_domain}/api/v4"
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"PRIVATE-TOKEN": config.token})

        logger.info(f"Cliente GitLab inicializado para {config.gitlab_domain}")

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")
        try:
            return self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise TransportError(f"Falha ao enviar requisição para {url}: {e}") from e

    def _get_list(self, path: str, model: Type[T], params: Optional[dict] = None) -> List[T]:
        """
        Executa um GET e valida o corpo como uma lista do modelo informado

        Args:
            path: Caminho relativo a /api/v4
            model: Modelo pydantic de cada item
            params: Parâmetros de query

        Returns:
            List[T]: Itens validados
        """
        response = self._request("GET", path, params=params)
        if response.status_code != 200:
            raise TransportError(f"GitLab respondeu {response.status_code} para {path}")
        try:
            return TypeAdapter(List[model]).validate_json(response.text)
        except ValidationError as e:
            raise ParseError(f"Resposta inesperada para {path}: {e.error_count()} erros de validação") from e

    def fetch_projects(self) -> List[Project]:
        """Obtém os projetos dos quais o usuário do token é membro"""
        projects = self._get_list("/projects", Project, params={"membership": "true", "simple": "true"})
        logger.info(f"Obtidos {len(projects)} projetos")
        return projects

    def fetch_issues(self, project_id: int) -> List[Issue]:
        """Obtém as issues de um projeto"""
        issues = self._get_list(f"/projects/{project_id}/issues", Issue)
        logger.info(f"Obtidas {len(issues)} issues do projeto {project_id}")
        return issues

    def fetch_members(self, project_id: int) -> List[Member]:
        """Obtém os membros de um projeto"""
        members = self._get_list(f"/projects/{project_id}/members", Member)
        logger.info(f"Obtidos {len(members)} membros do projeto {project_id}")
        return members

    def find_project(self, projects: List[Project]) -> Optional[Project]:
        """
        Procura o projeto cuja URL é a configurada

        Args:
            projects: Projetos disponíveis

        Returns:
            Optional[Project]: Projeto encontrado, ou None
        """
        return next((p for p in projects if p.web_url == self.url), None)

    def load_snapshot(self, project: Project) -> ProjectSnapshot:
        """Obtém issues e membros do projeto em um retrato imutável"""
        return ProjectSnapshot(
            project=project,
            issues=self.fetch_issues(project.id),
            members=self.fetch_members(project.id),
        )

    def assign_issue(self, project_id: int, issue_iid: int, member_id: int) -> None:
        """
        Atribui uma issue a um membro

        Args:
            project_id: Id do projeto
            issue_iid: Número da issue dentro do projeto
            member_id: Id do membro

        Raises:
            TransportError: Se a requisição falhar ou o GitLab não responder 200
        """
        response = self._request(
            "PUT",
            f"/projects/{project_id}/issues/{issue_iid}",
            params={"assignee_ids": member_id},
        )
        if response.status_code != 200:
            raise TransportError(f"GitLab respondeu {response.status_code} ao atribuir a issue #{issue_iid}")
