"""Base classes for units that teach and learn capabilities."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List

from eventunit.errors import CapabilityNotFoundError

logger = logging.getLogger("eventunit.unit")

Capability = Callable[..., Any]


@dataclass(frozen=True)
class UnitSchema:
    """Identity of a unit: its id and version."""

    id: str
    version: str = "1.0.0"


def create_unit_schema(id: str, version: str = "1.0.0") -> UnitSchema:
    return UnitSchema(id=id, version=version)


@dataclass
class UnitProps:
    dna: UnitSchema
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class TeachingContract:
    """Capabilities a unit hands over, keyed by operation name.

    Each capability is a type-erased callable taking the operation's
    positional arguments, so the learner can invoke it without knowing the
    providing unit's class.
    """

    unit_id: str
    capabilities: Dict[str, Capability]


class Unit(ABC):
    """Component that can teach its operations and learn those of others.

    Learned capabilities are stored under ``"<unit_id>.<name>"`` so that
    several units can expose operations with the same name side by side.
    """

    def __init__(self, props: UnitProps) -> None:
        self.props = props
        self._learned: Dict[str, Capability] = {}

    @property
    def dna(self) -> UnitSchema:
        return self.props.dna

    @property
    def metadata(self) -> Dict[str, Any]:
        return self.props.metadata

    # -- identity ------------------------------------------------------------------
    @abstractmethod
    def whoami(self) -> str:
        """Short human readable identity string."""

    @abstractmethod
    def teach(self) -> TeachingContract:
        """Return the capabilities this unit offers to others."""

    def help(self) -> str:
        learned = ", ".join(self.capabilities()) or "none"
        return f"{self.whoami()}\n\nLearned capabilities: {learned}\n"

    # -- learning ------------------------------------------------------------------
    def learn(self, contracts: Iterable[TeachingContract]) -> None:
        """Store every capability from *contracts* under its qualified name."""

        for contract in contracts:
            for name, capability in contract.capabilities.items():
                self._learned[f"{contract.unit_id}.{name}"] = capability
            logger.info(
                "%s learned %d capabilities from '%s'",
                self.dna.id,
                len(contract.capabilities),
                contract.unit_id,
            )

    def forget(self, unit_id: str) -> None:
        """Drop every capability learned from *unit_id*."""

        prefix = f"{unit_id}."
        for name in [name for name in self._learned if name.startswith(prefix)]:
            del self._learned[name]

    def can(self, capability: str) -> bool:
        return capability in self._learned

    def capabilities(self) -> List[str]:
        return list(self._learned)

    def execute(self, capability: str, *args: Any, **kwargs: Any) -> Any:
        """
        Invoke a learned capability by its qualified name, forwarding all arguments.

        Raises:
            CapabilityNotFoundError: If *capability* was never learned.
        """

        try:
            fn = self._learned[capability]
        except KeyError:
            raise CapabilityNotFoundError(capability) from None
        return fn(*args, **kwargs)


__all__ = [
    "Capability",
    "TeachingContract",
    "Unit",
    "UnitProps",
    "UnitSchema",
    "create_unit_schema",
]
