"""Abundance-weighted habitat summaries per species.

Joins nothing and fetches nothing: the observation table already carries the
sediment and seabed-habitat attributes for each sampling event. This module
turns it into per-species habitat profiles answering "which sediments and
habitat classes does each species' abundance sit in?", plus the unweighted
per-event baseline those profiles are compared against.

Each species is summarized from a ``HabitatAccumulator`` built in a single
pass over the observations, then finalized by division. The wide table is
built in two passes: collect every category observed for any species, then
materialize each species' row against that fixed column set.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from benthic_affinity.analysis.models import (
    EventHabitatSummary,
    SpeciesHabitatSummary,
    SummaryTable,
)
from benthic_affinity.analysis.traits import merge_traits
from benthic_affinity.reference import (
    CATEGORICAL_NAMES,
    CONTINUOUS_NAMES,
    MISSING_CATEGORY,
    TRAIT_NAMES,
    category_column,
)
from benthic_affinity.reference.attributes import order_by_family

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from benthic_affinity.schemas import Observation, SpeciesRecord, SpeciesTraits

ID_COLUMNS = ["species_id", "scientific_name"]
COUNT_COLUMNS = ["total_occ", "n_events", "total_abundance", "mean_abundance"]


@dataclass
class HabitatAccumulator:
    """Running sums for one species (or for the event baseline)."""

    continuous: Sequence[str] = CONTINUOUS_NAMES
    categorical: Sequence[str] = CATEGORICAL_NAMES
    occurrences: int = 0
    weight_total: float = 0.0
    events: set[str] = field(default_factory=set)
    weighted_sums: dict[str, float] = field(default_factory=dict)
    present_weights: dict[str, float] = field(default_factory=dict)
    category_weights: dict[str, dict[str, float]] = field(default_factory=dict)

    def add(self, obs: Observation, weight: float | None = None) -> None:
        """Fold one observation in, weighted by its abundance unless ``weight`` is given."""
        w = obs.abundance if weight is None else weight
        self.occurrences += 1
        self.weight_total += w
        self.events.add(obs.event_id)

        for name in self.continuous:
            value = obs.continuous.get(name)
            if value is None:
                continue
            self.weighted_sums[name] = self.weighted_sums.get(name, 0.0) + value * w
            self.present_weights[name] = self.present_weights.get(name, 0.0) + w

        for name in self.categorical:
            category = obs.categorical.get(name) or MISSING_CATEGORY
            buckets = self.category_weights.setdefault(name, {})
            buckets[category] = buckets.get(category, 0.0) + w

    def means(self) -> dict[str, float | None]:
        """Weighted mean per continuous attribute over observations with a value."""
        result: dict[str, float | None] = {}
        for name in self.continuous:
            weight = self.present_weights.get(name, 0.0)
            result[name] = self.weighted_sums[name] / weight if weight > 0 else None
        return result

    def frequencies(self) -> dict[str, dict[str, float]]:
        """Weighted relative frequency per category, missing bucket included.

        Categories are sorted with the missing bucket last. Only observed
        categories appear.
        """
        result: dict[str, dict[str, float]] = {}
        for name in self.categorical:
            buckets = self.category_weights.get(name, {})
            if self.weight_total <= 0:
                result[name] = {}
                continue
            result[name] = {
                category: buckets[category] / self.weight_total
                for category in _sorted_categories(buckets)
            }
        return result

    def finalize(
        self, species_id: str, scientific_name: str | None = None
    ) -> SpeciesHabitatSummary:
        """Divide the running sums out into a species summary."""
        if self.occurrences == 0:
            return empty_summary(species_id, scientific_name, self.continuous, self.categorical)
        return SpeciesHabitatSummary(
            species_id=species_id,
            scientific_name=scientific_name,
            total_occ=self.occurrences,
            n_events=len(self.events),
            total_abundance=self.weight_total,
            mean_abundance=self.weight_total / self.occurrences,
            continuous=self.means(),
            categorical=self.frequencies(),
        )


def _sorted_categories(categories: Iterable[str]) -> list[str]:
    return sorted(categories, key=lambda c: (c == MISSING_CATEGORY, c))


def empty_summary(
    species_id: str,
    scientific_name: str | None = None,
    continuous: Sequence[str] = CONTINUOUS_NAMES,
    categorical: Sequence[str] = CATEGORICAL_NAMES,
) -> SpeciesHabitatSummary:
    """Summary for a species with no observations: zero counts, nothing derived."""
    return SpeciesHabitatSummary(
        species_id=species_id,
        scientific_name=scientific_name,
        continuous=dict.fromkeys(continuous),
        categorical={name: {} for name in categorical},
    )


def accumulate_by_species(
    observations: Iterable[Observation],
    continuous: Sequence[str] = CONTINUOUS_NAMES,
    categorical: Sequence[str] = CATEGORICAL_NAMES,
) -> dict[str, HabitatAccumulator]:
    """Build one accumulator per species in a single pass over the observations.

    Duplicate rows for an event (matched to two habitat polygons upstream)
    each contribute their abundance, so such events count twice.
    """
    accumulators: dict[str, HabitatAccumulator] = {}
    for obs in observations:
        acc = accumulators.get(obs.species_id)
        if acc is None:
            acc = HabitatAccumulator(continuous=continuous, categorical=categorical)
            accumulators[obs.species_id] = acc
        acc.add(obs)
    return accumulators


def summarize_species(
    species_id: str,
    observations: Iterable[Observation],
    *,
    scientific_name: str | None = None,
    traits: Mapping[str, SpeciesTraits] | None = None,
    continuous: Sequence[str] = CONTINUOUS_NAMES,
    categorical: Sequence[str] = CATEGORICAL_NAMES,
    trait_fields: Sequence[str] = TRAIT_NAMES,
) -> SpeciesHabitatSummary:
    """Summarize the habitat of one species.

    A species with no observations gets a zero summary rather than an error.

    Args:
        species_id: Species to summarize.
        observations: The full observation table.
        scientific_name: Optional display name carried into the summary.
        traits: Trait rows keyed by species id. When given, trait fields are
            merged (None for species without a trait row).
        continuous: Continuous attribute names to average.
        categorical: Categorical attribute names to tabulate.
        trait_fields: Trait fields to merge.

    Returns:
        SpeciesHabitatSummary for the species.
    """
    acc = HabitatAccumulator(continuous=continuous, categorical=categorical)
    for obs in observations:
        if obs.species_id == species_id:
            acc.add(obs)
    summary = acc.finalize(species_id, scientific_name)
    if traits is not None:
        summary = merge_traits(summary, traits, trait_fields)
    return summary


def summarize_all_species(
    observations: Iterable[Observation],
    species: Sequence[SpeciesRecord] | None = None,
    *,
    traits: Mapping[str, SpeciesTraits] | None = None,
    continuous: Sequence[str] = CONTINUOUS_NAMES,
    categorical: Sequence[str] = CATEGORICAL_NAMES,
    trait_fields: Sequence[str] = TRAIT_NAMES,
) -> list[SpeciesHabitatSummary]:
    """Summarize every species in one pass over the observations.

    Args:
        observations: The full observation table.
        species: Species of interest, in output order. Listed species without
            observations get zero summaries. When None, every species present
            in the observations is summarized, in order of first appearance.
        traits: Trait rows keyed by species id, merged when given.
        continuous: Continuous attribute names to average.
        categorical: Categorical attribute names to tabulate.
        trait_fields: Trait fields to merge.

    Returns:
        One SpeciesHabitatSummary per species.
    """
    accumulators = accumulate_by_species(observations, continuous, categorical)
    if species is None:
        targets = [(species_id, None) for species_id in accumulators]
    else:
        targets = [(record.species_id, record.scientific_name) for record in species]

    summaries: list[SpeciesHabitatSummary] = []
    for species_id, scientific_name in targets:
        acc = accumulators.get(species_id)
        if acc is None:
            summary = empty_summary(species_id, scientific_name, continuous, categorical)
        else:
            summary = acc.finalize(species_id, scientific_name)
        if traits is not None:
            summary = merge_traits(summary, traits, trait_fields)
        summaries.append(summary)
    return summaries


def summarize_events(
    observations: Iterable[Observation],
    continuous: Sequence[str] = CONTINUOUS_NAMES,
    categorical: Sequence[str] = CATEGORICAL_NAMES,
) -> EventHabitatSummary:
    """Unweighted habitat distribution over sampling events, ignoring species.

    Each distinct combination of event id and habitat attribute values counts
    once, so an event matched to two habitat classes contributes both rows,
    the same way it does on the species path.
    """
    acc = HabitatAccumulator(continuous=continuous, categorical=categorical)
    seen: set[tuple[object, ...]] = set()
    for obs in observations:
        key = (
            obs.event_id,
            *(obs.continuous.get(name) for name in continuous),
            *(obs.categorical.get(name) for name in categorical),
        )
        if key in seen:
            continue
        seen.add(key)
        acc.add(obs, weight=1.0)

    if acc.occurrences == 0:
        return EventHabitatSummary(
            continuous=dict.fromkeys(continuous),
            categorical={name: {} for name in categorical},
        )
    return EventHabitatSummary(
        n_events=len(acc.events),
        n_rows=acc.occurrences,
        continuous=acc.means(),
        categorical=acc.frequencies(),
    )


def build_summary_table(
    summaries: Sequence[SpeciesHabitatSummary],
    continuous: Sequence[str] = CONTINUOUS_NAMES,
    categorical: Sequence[str] = CATEGORICAL_NAMES,
    trait_fields: Sequence[str] = TRAIT_NAMES,
) -> SummaryTable:
    """Union sparse species summaries into one dense wide table.

    Pass one collects every category observed for any species. Pass two
    builds each row against that fixed column set: absent categories are
    0.0 for species with observations and None for species without any.

    Column order: identity, counts, then attributes grouped by family
    (continuous before categorical within a family, categories sorted with
    the missing bucket last), then trait fields.
    """
    observed: dict[str, set[str]] = {name: set() for name in categorical}
    trait_keys: dict[str, None] = {}
    for summary in summaries:
        for name in categorical:
            observed[name].update(summary.categorical.get(name, {}))
        trait_keys.update(dict.fromkeys(summary.traits))

    attribute_columns: list[str] = []
    category_columns: dict[str, list[tuple[str, str]]] = {}
    for name in order_by_family([*continuous, *categorical]):
        if name in observed:
            cols = [(c, category_column(name, c)) for c in _sorted_categories(observed[name])]
            category_columns[name] = cols
            attribute_columns.extend(col for _, col in cols)
        else:
            attribute_columns.append(name)

    ordered_traits = [t for t in trait_fields if t in trait_keys]
    ordered_traits += [t for t in trait_keys if t not in ordered_traits]

    columns = ID_COLUMNS + COUNT_COLUMNS + attribute_columns + ordered_traits
    rows = [_materialize_row(s, continuous, category_columns, ordered_traits) for s in summaries]
    return SummaryTable(columns=columns, rows=rows)


def _materialize_row(
    summary: SpeciesHabitatSummary,
    continuous: Sequence[str],
    category_columns: dict[str, list[tuple[str, str]]],
    trait_fields: Sequence[str],
) -> dict[str, object]:
    row: dict[str, object] = {
        "species_id": summary.species_id,
        "scientific_name": summary.scientific_name,
        "total_occ": summary.total_occ,
        "n_events": summary.n_events,
        "total_abundance": summary.total_abundance,
        "mean_abundance": summary.mean_abundance,
    }
    for name in continuous:
        row[name] = summary.continuous.get(name)
    fill = 0.0 if summary.has_observations else None
    for name, cols in category_columns.items():
        freqs = summary.categorical.get(name, {})
        for category, column in cols:
            row[column] = freqs.get(category, fill)
    for name in trait_fields:
        row[name] = summary.traits.get(name)
    return row
