from typing import Callable, List
from loguru import logger

from ..errors import AssignmentError
from ..models.entities import Assignment, AssignmentPair, Issue, Member


class AssignmentExecutor:
    """Serviço responsável por gravar as atribuições sorteadas"""

    def __init__(self, execute: Callable[[Issue, Member], None]):
        """
        Inicializa o executor

        Args:
            execute: Função que atribui uma issue a um membro no serviço externo;
                deve lançar uma exceção em caso de falha
        """
        self.execute = execute

    def apply(self, assignment: Assignment) -> List[AssignmentPair]:
        """
        Aplica as atribuições na mesma ordem exibida na confirmação

        Para na primeira falha, sem desfazer nem repetir as atribuições já feitas.

        Args:
            assignment: Distribuição a aplicar

        Returns:
            List[AssignmentPair]: Pares aplicados

        Raises:
            AssignmentError: Na primeira atribuição que falhar
        """
        applied: List[AssignmentPair] = []
        for pair in assignment.pairs:
            try:
                self.execute(pair.issue, pair.member)
            except Exception as e:
                logger.error(
                    f"Falha ao atribuir {pair.issue.to_label()} a {pair.member.to_label()}; "
                    f"{len(applied)} issues já atribuídas"
                )
                raise AssignmentError(pair.issue, e, applied) from e
            applied.append(pair)
            logger.info(f"Issue {pair.issue.to_label()} atribuída a {pair.member.to_label()}")
        return applied
