from typing import List, Optional


class RouletteError(Exception):
    """Erro base da roleta. Todo erro fatal carrega o código de saída do processo"""

    exit_code: int = 1

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigError(RouletteError):
    """URL ou token ausentes/inválidos, ou arquivo de configuração malformado"""

    exit_code = 78


class TransportError(RouletteError):
    """Falha ao enviar uma requisição para o GitLab"""

    exit_code = 3


class ParseError(RouletteError):
    """Corpo da resposta não corresponde ao formato esperado"""

    exit_code = 4


class PreconditionError(RouletteError):
    """Pré-condição da distribuição não atendida (ex: nenhum membro selecionado)"""

    exit_code = 5


class AssignmentError(RouletteError):
    """
    Falha em uma das atribuições durante a execução

    As issues atribuídas antes da falha permanecem atribuídas no GitLab,
    por isso o erro informa tanto a issue que falhou quanto as já aplicadas.
    """

    exit_code = 6

    def __init__(self, failed_issue, cause: BaseException, applied: Optional[List] = None):
        self.failed_issue = failed_issue
        self.cause = cause
        self.applied = list(applied or [])
        super().__init__(
            f"Falha ao atribuir a issue {failed_issue.to_label()}: {cause}"
        )


class UserAbort(RouletteError):
    """Usuário cancelou a execução durante um prompt"""

    exit_code = 130

    def __init__(self, message: str = "Execução cancelada pelo usuário"):
        super().__init__(message)
