import random
from pathlib import Path
from typing import Optional
import typer
from loguru import logger
from rich.console import Console

from .errors import AssignmentError, ConfigError, PreconditionError, RouletteError
from .models.config import DEFAULT_CONFIG_FILE, load_config
from .gitlab.client import GitLabClient
from .services.selector import IssueSelector
from .services.balancer import Balancer
from .services.executor import AssignmentExecutor
from .services.report import AssignmentReport
from .ui.prompts import Prompter

app = typer.Typer(help="Roleta de Issues - distribui issues do GitLab entre os membros do projeto")
console = Console()

def configurar_logger(output_dir: Path = Path("logs"), verbose: bool = False):
    """Configura o sistema de logs"""
    output_dir.mkdir(parents=True, exist_ok=True)

    level = "DEBUG" if verbose else "INFO"
    logger.remove()  # Remove handlers padrão
    logger.add(
        output_dir / "roleta_{time}.log",
        rotation="1 day",
        retention="7 days",
        level=level,
        encoding='utf-8'
    )
    logger.add(lambda msg: console.print(msg, style="blue", markup=False, end=""), level=level)

def run(client: GitLabClient, prompter: Prompter, rng: random.Random, report_dir: Optional[Path] = None) -> int:
    """
    Executa o fluxo completo: busca, seleção, sorteio, confirmação e atribuição

    Args:
        client: Cliente do GitLab
        prompter: Colaborador de entrada interativa
        rng: Gerador aleatório do sorteio
        report_dir: Diretório onde gravar o relatório da distribuição

    Returns:
        int: Quantidade de issues atribuídas
    """
    projects = client.fetch_projects()
    if not projects:
        raise ConfigError("Nenhum projeto acessível com este token")
    project = client.find_project(projects)
    if project is not None:
        console.print(f"Projeto encontrado: [bold]{project.name}[/bold]")
    else:
        idx = prompter.select_one("Selecione um projeto:", [p.to_label() for p in projects])
        project = projects[idx]

    snapshot = client.load_snapshot(project)

    selected_issues = IssueSelector(snapshot, prompter).select()

    picked = prompter.select_many(
        "Selecione os membros que receberão as issues:",
        [m.to_label() for m in snapshot.members],
    )
    selected_members = [snapshot.members[i] for i in picked]
    if not selected_members:
        raise PreconditionError("Nenhum membro selecionado, não há como distribuir as issues")

    if not prompter.confirm("Deseja continuar?", default=True):
        return 0

    assignment = Balancer(rng).assign(selected_issues, selected_members)
    report = AssignmentReport(assignment, project)
    report.render(console)

    if not prompter.confirm("Deseja confirmar esta distribuição?"):
        console.print("Saindo")
        return 0

    if report_dir is not None:
        report.save(report_dir)

    executor = AssignmentExecutor(
        lambda issue, member: client.assign_issue(project.id, issue.iid, member.id)
    )
    applied = executor.apply(assignment)
    console.print("[green]Issues atribuídas![/green]")
    return len(applied)

@app.command()
def executar(
    url: Optional[str] = typer.Option(None, "--url", "-u", help="URL do projeto"),
    token: Optional[str] = typer.Option(None, "--token", "-t", help="Token do GitLab usado na conexão"),
    config_file: Path = typer.Option(
        DEFAULT_CONFIG_FILE,
        "--config-file",
        "-c",
        help="Arquivo TOML de configuração",
        dir_okay=False,
    ),
    seed: Optional[int] = typer.Option(None, help="Semente do sorteio, para resultados reproduzíveis"),
    report_dir: Optional[Path] = typer.Option(
        None, help="Diretório onde gravar o relatório da distribuição", file_okay=False
    ),
    log_dir: Path = typer.Option(Path("logs"), help="Diretório dos arquivos de log", file_okay=False),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Exibe logs de depuração"),
):
    """Sorteia e atribui issues do GitLab entre os membros escolhidos"""
    configurar_logger(log_dir, verbose)
    try:
        config = load_config(config_file, url=url, token=token)
        logger.info(f"Usando projeto {config.url}")

        client = GitLabClient(config)
        assigned = run(client, Prompter(console), random.Random(seed), report_dir)
        logger.info(f"Processo concluído: {assigned} issues atribuídas")
    except RouletteError as e:
        logger.error(e.message)
        if isinstance(e, AssignmentError) and e.applied:
            logger.warning(
                "Issues já atribuídas antes da falha: "
                + ", ".join(pair.issue.to_label() for pair in e.applied)
            )
        raise typer.Exit(e.exit_code)

if __name__ == "__main__":
    # Configura e executa a aplicação
    app()
