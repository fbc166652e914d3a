# src/jobtree/core/resolution_context.py
"""
ResolutionContext — contexto canônico de uma passada de resolução.

Este módulo define o **ResolutionContext**, a estrutura compartilhada
durante a resolução de uma árvore de jobs (merge → reescrita → validação).

O ResolutionContext é o meio de:
- registro de logs estruturados da resolução
- coleta de warnings não fatais por job
- acesso aos settings de geração (jenkins_url, generation_pom, home)

Princípios fundamentais:
- Isolamento por passada (cada resolução possui seu próprio contexto)
- Nenhum estado global; nada sobrevive à passada
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4


@dataclass
class ResolutionContext:
    """
    Contexto de uma passada de resolução.

    Campos canônicos:
    - run_id: identificador único da passada
    - jenkins_url / generation_pom: settings carimbados em todo job
    - home: diretório home usado pela reescrita de goals Maven
    - config_hash: hash do documento de entrada (quando carregado de arquivo)
    - warnings: warnings por job_id
    - events: log estruturado de eventos
    """

    jenkins_url: str
    generation_pom: str
    home: Optional[str] = None
    config_hash: str = ""
    run_id: str = field(default_factory=lambda: uuid4().hex)
    created_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    warnings: Dict[str, List[str]] = field(default_factory=dict)
    events: List[Dict[str, Any]] = field(default_factory=list)

    def log(self, *, job_id: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "job_id": job_id,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, job_id: str, message: str) -> None:
        if job_id not in self.warnings:
            self.warnings[job_id] = []
        self.warnings[job_id].append(message)
        self.log(job_id=job_id, level="WARNING", message=message)

    def events_for(self, job_id: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("job_id") == job_id]
