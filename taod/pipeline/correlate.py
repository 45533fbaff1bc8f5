"""Natural-key to surrogate-id index linking supplementary rows to accidents."""

from __future__ import annotations

from typing import Iterable, Mapping
from uuid import UUID

from taod.common.errors import ConfigError, DuplicateAccidentError
from taod.common.models import AccidentIdentifier, AccidentRecord

DUPLICATE_POLICIES = ("overwrite", "reject")


class AccidentIndex:
    """Maps :class:`AccidentIdentifier` to the surrogate id of its accident.

    Use :meth:`build` to obtain an index; it is only returned once every
    accident has been registered and is treated as read-only afterwards.
    """

    def __init__(self, *, on_duplicate: str = "overwrite", seed: Mapping[AccidentIdentifier, UUID] | None = None) -> None:
        if on_duplicate not in DUPLICATE_POLICIES:
            raise ConfigError(f"Unknown duplicate policy: {on_duplicate}")
        self._on_duplicate = on_duplicate
        self._ids: dict[AccidentIdentifier, UUID] = dict(seed or {})

    @classmethod
    def build(
        cls,
        records: Iterable[AccidentRecord],
        *,
        on_duplicate: str = "overwrite",
        seed: Mapping[AccidentIdentifier, UUID] | None = None,
    ) -> "AccidentIndex":
        index = cls(on_duplicate=on_duplicate, seed=seed)
        for record in records:
            index.register(record)
        return index

    def register(self, record: AccidentRecord) -> None:
        identifier = record.identifier()
        if self._on_duplicate == "reject" and identifier in self._ids:
            raise DuplicateAccidentError(
                f"accident {identifier} appears more than once in the main file",
                key=identifier,
            )
        self._ids[identifier] = record.id

    def resolve(self, identifier: AccidentIdentifier) -> UUID | None:
        return self._ids.get(identifier)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._ids

    def __len__(self) -> int:
        return len(self._ids)
