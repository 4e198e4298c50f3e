from typing import Callable, List, Optional, Sequence
from rich.console import Console
from rich.prompt import Confirm, IntPrompt, Prompt

from ..errors import UserAbort

ALL = "*"


def parse_selection(raw: str, size: int) -> List[int]:
    """
    Converte uma entrada como "1,3-5" em índices (base zero)

    Args:
        raw: Texto digitado; números começam em 1, "*" seleciona todos
        size: Quantidade de opções

    Returns:
        List[int]: Índices escolhidos, ordenados e sem repetição

    Raises:
        ValueError: Se algum item não for número ou estiver fora das opções
    """
    raw = raw.strip()
    if not raw:
        return []
    if raw == ALL:
        return list(range(size))

    picked = set()
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        if "-" in part:
            first, last = (int(p) for p in part.split("-", 1))
            if first > last:
                raise ValueError(f"intervalo invertido: {part}")
            numbers = range(first, last + 1)
        else:
            numbers = [int(part)]
        for n in numbers:
            if not 1 <= n <= size:
                raise ValueError(f"{n} não está entre 1 e {size}")
            picked.add(n - 1)
    return sorted(picked)


class Prompter:
    """Entradas interativas do terminal"""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def _ask(self, func: Callable, *args, **kwargs):
        try:
            return func(*args, console=self.console, **kwargs)
        except (EOFError, KeyboardInterrupt) as e:
            raise UserAbort() from e

    def _show_options(self, label: str, options: Sequence[str]) -> None:
        self.console.print(f"[bold]{label}[/bold]")
        for i, option in enumerate(options, 1):
            self.console.print(f"  [cyan]{i:>3}[/cyan]  {option}")

    def select_one(self, label: str, options: Sequence[str]) -> int:
        """Mostra as opções numeradas e retorna o índice escolhido"""
        self._show_options(label, options)
        while True:
            choice = self._ask(IntPrompt.ask, "Escolha")
            if 1 <= choice <= len(options):
                return choice - 1
            self.console.print(f"[red]Informe um número entre 1 e {len(options)}[/red]")

    def select_many(self, label: str, options: Sequence[str]) -> List[int]:
        """Mostra as opções numeradas e retorna os índices escolhidos"""
        if not options:
            self.console.print(f"[bold]{label}[/bold] [dim](nenhuma opção disponível)[/dim]")
            return []
        self._show_options(label, options)
        while True:
            raw = self._ask(Prompt.ask, "Escolha (ex: 1,3-5; * para todos)", default="")
            try:
                return parse_selection(raw, len(options))
            except ValueError as e:
                self.console.print(f"[red]Seleção inválida: {e}[/red]")

    def validated_number(self, label: str, validate: Callable[[str], Optional[str]]) -> int:
        """
        Pergunta até receber uma entrada válida

        Args:
            label: Texto da pergunta
            validate: Retorna a mensagem de erro da entrada, ou None se ela for válida

        Returns:
            int: Número informado
        """
        while True:
            raw = self._ask(Prompt.ask, label).strip()
            error = validate(raw)
            if error is None:
                return int(raw)
            self.console.print(f"[red]{error}[/red]")

    def confirm(self, label: str, default: bool = False) -> bool:
        return self._ask(Confirm.ask, label, default=default)
