"""Discrete simulation events pushed to clients as they happen."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class EatenEvent:
    """Actor ``eater_id`` ate actor ``prey_id`` during a tick."""

    eater_id: str
    prey_id: str

    def to_dict(self) -> Dict[str, str]:
        return {"eaterId": self.eater_id, "preyId": self.prey_id}
