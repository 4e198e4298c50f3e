import tomllib
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse
from pydantic import BaseModel, ValidationError, field_validator
from loguru import logger

from ..errors import ConfigError

DEFAULT_CONFIG_FILE = "./gitlab-roulette.toml"


class RouletteConfig(BaseModel):
    """Configuração principal da roleta"""

    url: str
    token: str

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Valida que a URL tem esquema e domínio"""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise ValueError(f'a url "{v}" não é válida')
        try:
            parsed.port
        except ValueError as e:
            raise ValueError(f'a url "{v}" não é válida') from e
        return v

    @property
    def gitlab_domain(self) -> str:
        """Retorna esquema e domínio do GitLab extraídos da URL do projeto"""
        parsed = urlparse(self.url)
        domain = f"{parsed.scheme}://{parsed.hostname}"
        if parsed.port:
            domain += f":{parsed.port}"
        return domain


def load_config_file(path: Path) -> dict:
    """
    Carrega um arquivo TOML de configuração

    Args:
        path: Caminho do arquivo

    Returns:
        dict: Conteúdo do arquivo, ou dicionário vazio se o arquivo não existir
    """
    if not path.is_file():
        logger.debug(f"Arquivo de configuração {path} não encontrado, usando apenas a linha de comando")
        return {}
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as e:
        raise ConfigError(f"Erro ao carregar arquivo de configuração {path}: {e}") from e


def load_config(
    config_file: Optional[Path] = None,
    url: Optional[str] = None,
    token: Optional[str] = None,
) -> RouletteConfig:
    """
    Monta a configuração a partir do arquivo TOML e das opções da linha de comando

    As opções da linha de comando têm precedência sobre o arquivo.

    Args:
        config_file: Arquivo TOML de configuração
        url: URL do projeto informada na linha de comando
        token: Token do GitLab informado na linha de comando

    Returns:
        RouletteConfig: Configuração validada

    Raises:
        ConfigError: Se a url ou o token estiverem ausentes ou forem inválidos
    """
    data = load_config_file(Path(config_file or DEFAULT_CONFIG_FILE))
    if url is not None:
        data["url"] = url
    if token is not None:
        data["token"] = token

    if not data.get("url"):
        raise ConfigError("Adicione uma url ao arquivo de configuração ou use o argumento --url")
    if not data.get("token"):
        raise ConfigError("Adicione um token ao arquivo de configuração ou use o argumento --token")

    try:
        return RouletteConfig(url=str(data["url"]), token=str(data["token"]))
    except ValidationError as e:
        message = e.errors()[0]["msg"].removeprefix("Value error, ")
        raise ConfigError(message) from e
