# src/hydralite/core/config/errors.py
"""
Exceções canônicas da camada de configuração do hydralite.

Este módulo define a hierarquia oficial de exceções utilizadas durante
o parsing de fontes, composição via `defaults`, aplicação de overrides,
resolução de interpolações e leitura tipada da árvore de configuração.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros estruturais são tratados como falhas fatais
    - Mensagens nomeiam o path, a expressão ou o arquivo envolvido

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma operação produz árvore parcial após uma exceção

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não formata mensagens para CLI (responsabilidade de `hydralite.cli`)
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do hydralite.

    Todas as exceções levantadas durante carregamento, composição,
    overrides e interpolação herdam desta classe, permitindo captura
    genérica na borda da aplicação (CLI).
    """


class ConfigParseError(ConfigError):
    """
    Exceção levantada quando um texto de entrada é malformado.

    Cobre:
        - YAML inválido (incluindo anchors/aliases, não suportados)
        - placeholders `${...}` não terminados
        - expressões de override sem `=`, com path ou valor vazios
        - componentes de path vazios ou escape pendente
    """


class InvalidDefaultsError(ConfigParseError):
    """
    Exceção levantada quando o bloco `defaults` tem formato inválido.

    Exemplos:
        - `defaults` que não é uma sequência
        - entrada mapping com mais de uma chave
        - entrada `{group: name}` cujo valor não é string
    """


class TypeMismatchError(ConfigError, TypeError):
    """
    Exceção levantada quando um acessor é usado contra a variante errada.

    Exemplo:
        - `node.as_int()` sobre um nó string
    """


class InterpolationTypeError(TypeMismatchError):
    """Um container (mapping/sequence) foi referenciado dentro de uma string."""


class MissingKeyError(ConfigError):
    """
    Exceção levantada quando um path referencia uma chave inexistente
    sem permissão de criação (override sem prefixo `+`, leitura obrigatória).
    """


class StructuralConflictError(ConfigError):
    """
    Exceção levantada quando a estrutura da árvore impede a operação.

    Casos:
        - override atravessa um nó que não é mapping
        - override `+key=...` sobre chave já existente
        - raiz da configuração não é mapping nem null
    """


class CyclicIncludeError(ConfigError):
    """
    Exceção levantada quando a cadeia de `defaults` inclui novamente
    um arquivo que ainda está em carregamento.
    """


class CyclicInterpolationError(ConfigError):
    """
    Exceção levantada quando uma referência `${...}` depende,
    direta ou indiretamente, de si mesma.
    """


class UnresolvedReferenceError(ConfigError):
    """
    Exceção levantada quando o alvo de uma interpolação ou de uma
    inclusão obrigatória não existe.
    """


class ConfigIOError(ConfigError):
    """Falha de leitura de fonte ou de escrita de artefatos em disco."""
