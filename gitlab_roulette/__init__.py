"""
Roleta de Issues do GitLab

Este pacote implementa uma ferramenta para selecionar issues de um projeto GitLab
e distribuí-las de forma equilibrada e aleatória entre os membros escolhidos,
gravando as atribuições de volta no GitLab.
"""

__version__ = "1.0.0"
