from datetime import datetime
from pathlib import Path
import json
from loguru import logger
from rich.console import Console
from rich.table import Table

from ..models.entities import Assignment, Project

class AssignmentReport:
    """Serviço responsável pela exibição e gravação da distribuição sorteada"""

    def __init__(self, assignment: Assignment, project: Project):
        """
        Inicializa o relatório

        Args:
            assignment: Distribuição sorteada
            project: Projeto das issues
        """
        self.assignment = assignment
        self.project = project

    def preview_table(self) -> Table:
        """Monta a tabela de pré-visualização, na ordem em que as atribuições serão executadas"""
        table = Table(title=f"Distribuição - {self.project.path_with_namespace}")
        table.add_column("Issue", style="bold")
        table.add_column("Membro", style="cyan")
        for pair in self.assignment.pairs:
            table.add_row(pair.issue.to_label(), pair.member.to_label())
        return table

    def summary_table(self) -> Table:
        """Monta a tabela com a quantidade de issues por membro"""
        counts = self.assignment.counts_by_member()
        table = Table(title="Issues por membro")
        table.add_column("Membro")
        table.add_column("Issues", justify="right")
        for member in self.assignment.members:
            table.add_row(member.to_label(), str(counts.get(member.id, 0)))
        return table

    def render(self, console: Console) -> None:
        """Exibe a pré-visualização e o resumo no console"""
        console.print()
        console.print(self.preview_table())
        console.print(self.summary_table())

    def to_dict(self) -> dict:
        counts = self.assignment.counts_by_member()
        return {
            "project": self.project.path_with_namespace,
            "generated_at": datetime.now().isoformat(timespec="seconds"),
            "assignments": [
                {
                    "issue_id": pair.issue.id,
                    "issue_iid": pair.issue.iid,
                    "title": pair.issue.title,
                    "member_id": pair.member.id,
                    "username": pair.member.username,
                }
                for pair in self.assignment.pairs
            ],
            "counts": {m.username: counts.get(m.id, 0) for m in self.assignment.members},
        }

    def save(self, output_dir: Path) -> Path:
        """
        Grava a distribuição em JSON

        Args:
            output_dir: Diretório de saída

        Returns:
            Path: Caminho do arquivo gravado
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        path = output_dir / f"roulette_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"
        path.write_text(json.dumps(self.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info(f"Relatório da distribuição gravado em {path}")
        return path
