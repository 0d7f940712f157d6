"""Exceções para cache-key-hierarchy."""


class CacheKeyError(Exception):
    """Erro base para construção de chaves de cache.

    Attributes:
        key: Fragmento de chave ou valor que causou o erro, quando houver
    """

    def __init__(self, message: str, key: str | None = None) -> None:
        self.key = key
        super().__init__(message)


class CacheKeyConfigurationError(CacheKeyError, ValueError):
    """Configuração inválida do builder (scope, encoder, listeners, env vars)."""

    pass


class ParameterEncodingError(CacheKeyError):
    """Valor de parâmetro que não pode ser representado na chave."""

    pass
