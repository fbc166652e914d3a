# src/jobtree/core/config/errors.py
"""
Exceções canônicas da camada de configuração do jobtree.

Este módulo define a hierarquia oficial de exceções utilizadas durante
o carregamento e a validação estrutural da árvore declarativa de jobs.

As exceções aqui definidas representam **falhas estruturais da entrada**
(arquivos, tipos, chaves desconhecidas), e não erros de um job resolvido;
estes últimos vivem em `jobtree.core.exceptions`.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não depende de engine ou do modelo de job
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados ao carregamento de configuração.

    Permite captura genérica de erros estruturais de entrada, distinta das
    falhas de resolução de um job.
    """


class DefaultsNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de configuração base (defaults)
    não é encontrado no caminho especificado.

    Decisões arquiteturais:
        - O arquivo de defaults é obrigatório
        - Não tenta inferir ou criar defaults automaticamente
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo não é suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """Conteúdo raiz do arquivo não é um dicionário (`dict`)."""


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"jobs": [...]}
        - override: {"jobs": "nightly"}

    Nenhum merge parcial é produzido em caso de conflito.
    """


class InvalidJobRecordError(ConfigError):
    """
    Registro de job malformado na árvore declarativa.

    Exemplos:
        - chave desconhecida
        - `type` de task desconhecido
        - valor de enum inválido para `run_post_steps_if_result`
    """
