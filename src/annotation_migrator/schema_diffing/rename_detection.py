"""Strategies pairing removed fields with added fields as renames."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from annotation_migrator.schema_management.schema_models import FieldDefinition

from .diff_outcomes import RenamePair


class RenameDetector(Protocol):
    """Decide which removed/added field pairs are renames of each other."""

    def detect_renames(
        self,
        removed: Sequence[FieldDefinition],
        added: Sequence[FieldDefinition],
    ) -> tuple[RenamePair, ...]: ...


class SinglePairRenameDetector:
    """Only one removed and one added field of identical type count as a rename.

    Several simultaneous renames are never disambiguated; each side is then
    reported as an independent removal and addition.
    """

    def detect_renames(
        self,
        removed: Sequence[FieldDefinition],
        added: Sequence[FieldDefinition],
    ) -> tuple[RenamePair, ...]:
        if len(removed) != 1 or len(added) != 1:
            return ()
        old_field, new_field = removed[0], added[0]
        if old_field.type != new_field.type:
            return ()
        return (RenamePair(from_field=old_field.name, to_field=new_field.name),)


class GreedySameTypeRenameDetector:
    """Pair each removed field with the first unpaired added field of the same type."""

    def detect_renames(
        self,
        removed: Sequence[FieldDefinition],
        added: Sequence[FieldDefinition],
    ) -> tuple[RenamePair, ...]:
        pairs: list[RenamePair] = []
        paired: set[str] = set()
        for old_field in removed:
            match = next(
                (
                    candidate
                    for candidate in added
                    if candidate.name not in paired and candidate.type == old_field.type
                ),
                None,
            )
            if match is None:
                continue
            paired.add(match.name)
            pairs.append(RenamePair(from_field=old_field.name, to_field=match.name))
        return tuple(pairs)


class NoRenameDetector:
    """Never infer renames; every change is a removal plus an addition."""

    def detect_renames(
        self,
        removed: Sequence[FieldDefinition],
        added: Sequence[FieldDefinition],
    ) -> tuple[RenamePair, ...]:
        return ()


RENAME_STRATEGIES: dict[str, type[RenameDetector]] = {
    "single_pair": SinglePairRenameDetector,
    "greedy_same_type": GreedySameTypeRenameDetector,
    "none": NoRenameDetector,
}


def rename_detector_for(strategy: str) -> RenameDetector:
    """Return the rename detector registered under `strategy`."""
    try:
        detector_cls = RENAME_STRATEGIES[strategy]
    except KeyError as exc:
        supported = ", ".join(sorted(RENAME_STRATEGIES))
        raise ValueError(
            f"Unsupported rename strategy '{strategy}'. Expected one of: {supported}"
        ) from exc
    return detector_cls()
