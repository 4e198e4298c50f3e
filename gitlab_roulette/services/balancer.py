import random
from typing import List, Optional, Sequence
from loguru import logger

from ..errors import PreconditionError
from ..models.entities import Assignment, AssignmentPair, Issue, Member


class Balancer:
    """Serviço responsável pela distribuição equilibrada e aleatória das issues"""

    def __init__(self, rng: Optional[random.Random] = None):
        """
        Inicializa o balanceador

        Args:
            rng: Gerador aleatório usado no sorteio; informe um gerador com seed
                para obter resultados reproduzíveis
        """
        self.rng = rng or random.Random()

    def allocation(self, n_issues: int, n_members: int) -> List[int]:
        """
        Monta o vetor de índices de membros, um por issue

        Cada membro aparece n div m vezes; os n mod m membros que recebem
        uma issue a mais são sorteados sem reposição. O vetor final é embaralhado.

        Args:
            n_issues: Quantidade de issues selecionadas
            n_members: Quantidade de membros selecionados

        Returns:
            List[int]: Índice do membro para cada posição de issue

        Raises:
            PreconditionError: Se nenhum membro foi selecionado
        """
        if n_members < 1:
            raise PreconditionError("Selecione ao menos um membro para distribuir as issues")

        per_member, rest = divmod(n_issues, n_members)
        vector = [idx for idx in range(n_members) for _ in range(per_member)]
        vector.extend(self.rng.sample(range(n_members), rest))
        self.rng.shuffle(vector)

        logger.debug(f"{n_issues} issues para {n_members} membros: {per_member} cada, {rest} com uma a mais")
        return vector

    def assign(self, issues: Sequence[Issue], members: Sequence[Member]) -> Assignment:
        """
        Sorteia um membro para cada issue

        Args:
            issues: Issues selecionadas
            members: Membros selecionados

        Returns:
            Assignment: Pares issue/membro na ordem das issues
        """
        vector = self.allocation(len(issues), len(members))
        pairs = [
            AssignmentPair(issue=issue, member=members[vector[i]])
            for i, issue in enumerate(issues)
        ]
        return Assignment(members=list(members), pairs=pairs)
