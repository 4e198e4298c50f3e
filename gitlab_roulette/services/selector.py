from typing import Iterable, List, Optional, Sequence
from loguru import logger

from ..models.entities import Issue, Milestone, ProjectSnapshot, SelectionStrategy


def select_by_milestones(issues: Sequence[Issue], milestones: Iterable[Milestone]) -> List[Issue]:
    """
    Seleciona as issues cuja milestone está entre as escolhidas

    Issues sem milestone nunca são selecionadas.

    Args:
        issues: Issues do projeto
        milestones: Milestones escolhidas

    Returns:
        List[Issue]: Issues selecionadas, na ordem original
    """
    picked = set(milestones)
    return [i for i in issues if i.milestone is not None and i.milestone in picked]


def select_by_range(issues: Sequence[Issue], start: int, end: int) -> List[Issue]:
    """
    Seleciona as issues com id entre start e end (inclusivo)

    Se start for maior que end o resultado é vazio.

    Args:
        issues: Issues do projeto
        start: Id da primeira issue
        end: Id da última issue

    Returns:
        List[Issue]: Issues selecionadas, na ordem original
    """
    return [i for i in issues if start <= i.id <= end]


def select_manual(issues: Sequence[Issue], indexes: Iterable[int]) -> List[Issue]:
    """Retorna as issues escolhidas pelo índice, na ordem original"""
    picked = set(indexes)
    return [issue for idx, issue in enumerate(issues) if idx in picked]


class IssueSelector:
    """Serviço responsável pela seleção interativa das issues a distribuir"""

    def __init__(self, snapshot: ProjectSnapshot, prompter):
        """
        Inicializa o seletor

        Args:
            snapshot: Issues e membros obtidos do projeto
            prompter: Colaborador de entrada interativa
        """
        self.snapshot = snapshot
        self.prompter = prompter

    def choose_strategy(self) -> SelectionStrategy:
        """Pergunta ao usuário qual estratégia de seleção usar"""
        strategies = list(SelectionStrategy)
        idx = self.prompter.select_one(
            "Selecione a forma de escolher as issues:",
            [s.to_label() for s in strategies],
        )
        return strategies[idx]

    def select(self, strategy: Optional[SelectionStrategy] = None) -> List[Issue]:
        """
        Reduz as issues do projeto ao subconjunto a distribuir

        Args:
            strategy: Estratégia de seleção; se omitida, pergunta ao usuário

        Returns:
            List[Issue]: Issues selecionadas, possivelmente vazia
        """
        if strategy is None:
            strategy = self.choose_strategy()
        logger.info(f"Selecionando issues pela estratégia {strategy.value}")

        if strategy == SelectionStrategy.MILESTONE:
            selected = self._select_milestones()
        elif strategy == SelectionStrategy.RANGE:
            selected = self._select_range()
        else:
            selected = self._select_manual()

        logger.info(f"{len(selected)} issues selecionadas de {len(self.snapshot.issues)}")
        return selected

    def _select_milestones(self) -> List[Issue]:
        milestones = self.snapshot.milestones()
        if not milestones:
            logger.warning("Nenhuma issue do projeto possui milestone")
        picked = self.prompter.select_many(
            "Selecione as milestones que deseja usar:",
            [m.to_label() for m in milestones],
        )
        return select_by_milestones(self.snapshot.issues, [milestones[i] for i in picked])

    def _select_range(self) -> List[Issue]:
        start = self.prompter.validated_number(
            "Informe o ID da primeira issue:", self._validate_issue_id
        )
        end = self.prompter.validated_number(
            "Informe o ID da última issue:", self._validate_issue_id
        )
        if start > end:
            logger.warning(f"Intervalo invertido ({start} > {end}), nenhuma issue será selecionada")
        return select_by_range(self.snapshot.issues, start, end)

    def _select_manual(self) -> List[Issue]:
        picked = self.prompter.select_many(
            "Selecione as issues que deseja usar:",
            [i.to_label() for i in self.snapshot.issues],
        )
        return select_manual(self.snapshot.issues, picked)

    def _validate_issue_id(self, raw: str) -> Optional[str]:
        """Retorna a mensagem de erro para a entrada, ou None se ela for um id existente"""
        try:
            issue_id = int(raw)
        except ValueError:
            return "A entrada não é um número"
        if not self.snapshot.has_issue(issue_id):
            return "Issue não encontrada"
        return None
