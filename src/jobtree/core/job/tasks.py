# src/jobtree/core/job/tasks.py
"""
Variantes de build-step (tasks) e geração de markup.

Um build-step é um valor imutável de um conjunto fechado de variantes:
    - Shell     → `hudson.tasks.Shell`
    - BatchFile → `hudson.tasks.BatchFile`
    - Ant       → `hudson.tasks.Ant`
    - Maven     → `hudson.tasks.Maven`

Cada variante expõe `declared_properties()`: a lista ordenada de pares
(nome da tag, valor) que participam do markup. A geração de markup é uma
função pura sobre essa lista.

Contrato com o renderer (bit a bit):
    - uma linha `<tag>valor</tag>` por propriedade declarada
    - valor com espaços das pontas removidos
    - propriedade vazia após strip é omitida
    - cada linha indentada com 8 espaços, unidas por `\\n`
    - booleanos renderizados em minúsculas (`true`/`false`)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Type, Union


INDENT = " " * 8
HUDSON_TASKS_PACKAGE = "hudson.tasks"


@dataclass(frozen=True)
class Shell:
    command: str = ""

    def declared_properties(self) -> List[Tuple[str, Any]]:
        return [("command", self.command)]


@dataclass(frozen=True)
class BatchFile:
    command: str = ""

    def declared_properties(self) -> List[Tuple[str, Any]]:
        return [("command", self.command)]


@dataclass(frozen=True)
class Ant:
    targets: str = ""
    ant_name: Optional[str] = None
    ant_opts: str = ""
    build_file: str = "build.xml"
    properties: str = ""

    def declared_properties(self) -> List[Tuple[str, Any]]:
        props: List[Tuple[str, Any]] = []
        if self.ant_name:
            props.append(("antName", self.ant_name))
        props += [
            ("targets", self.targets),
            ("antOpts", self.ant_opts),
            ("buildFile", self.build_file),
            ("properties", self.properties),
        ]
        return props


@dataclass(frozen=True)
class Maven:
    targets: str = "-B -e clean install"
    maven_name: str = "(Default)"
    jvm_options: str = ""
    pom: str = "pom.xml"
    properties: str = ""
    use_private_repository: bool = False

    def declared_properties(self) -> List[Tuple[str, Any]]:
        props: List[Tuple[str, Any]] = [
            ("targets", self.targets),
            ("mavenName", self.maven_name),
            ("jvmOptions", self.jvm_options),
        ]
        # pom "false" desliga a tag (o scheduler usa o pom do workspace)
        if self.pom != "false":
            props.append(("pom", self.pom))
        props += [
            ("properties", self.properties),
            ("usePrivateRepository", self.use_private_repository),
        ]
        return props


Task = Union[Shell, BatchFile, Ant, Maven]

TASK_TYPES: Dict[str, Type[Any]] = {
    "shell": Shell,
    "batch_file": BatchFile,
    "ant": Ant,
    "maven": Maven,
}


def _render_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value).strip()


def hudson_class(task: Task) -> str:
    """Nome de classe do scheduler para a variante (ex.: `hudson.tasks.Shell`)."""
    return f"{HUDSON_TASKS_PACKAGE}.{type(task).__name__}"


def markup(task: Task) -> str:
    """Gera o bloco de tags do step; string vazia se nada foi declarado."""
    lines = []
    for name, raw in task.declared_properties():
        value = _render_value(raw)
        if value:
            lines.append(f"<{name}>{value}</{name}>")

    if not lines:
        return ""
    return INDENT + f"\n{INDENT}".join(lines)
