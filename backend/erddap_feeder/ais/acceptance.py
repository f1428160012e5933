"""Acceptance rules deciding which AIS messages are forwarded."""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

from erddap_feeder.ais.models import MessageIdentifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AcceptanceRule:
    """An accepted message identifier and the stations it ignores."""

    identifier: MessageIdentifier
    ignore_mmsi: frozenset[int] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "ignore_mmsi", frozenset(self.ignore_mmsi))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AcceptanceRule":
        """Create a rule from a configuration entry."""
        identifier = MessageIdentifier(
            type=int(data["type"]),
            dac=int(data["dac"]) if data.get("dac") is not None else None,
            fid=int(data["fid"]) if data.get("fid") is not None else None,
        )
        return cls(
            identifier=identifier,
            ignore_mmsi=frozenset(int(m) for m in data.get("ignore_mmsi") or []),
        )


class AcceptanceTable:
    """Lookup of acceptance rules by exact message identifier.

    Later rules with an identifier already present replace the earlier one.
    """

    def __init__(self, rules: Iterable[AcceptanceRule] = ()):
        table: dict[MessageIdentifier, AcceptanceRule] = {}
        for rule in rules:
            if rule.identifier in table:
                logger.warning(
                    f"Duplicate acceptance rule for {rule.identifier}, "
                    f"the later entry replaces the earlier one"
                )
            table[rule.identifier] = rule
        self._rules = table

    def lookup(self, identifier: MessageIdentifier) -> Optional[AcceptanceRule]:
        """Get the rule accepting this identifier, if any."""
        return self._rules.get(identifier)

    @staticmethod
    def is_excluded(rule: AcceptanceRule, mmsi: int) -> bool:
        """Check whether a decoded MMSI is on the rule's ignore list."""
        return mmsi in rule.ignore_mmsi

    @property
    def rules(self) -> list[AcceptanceRule]:
        return list(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        ids = ", ".join(str(i) for i in self._rules)
        return f"<AcceptanceTable([{ids}])>"
