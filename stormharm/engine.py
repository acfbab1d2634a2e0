"""
Analysis pipeline (STORMHARM)
=============================

This is the heart of the project. Two fixed questions are answered over one
loaded table of StormEvent records:

1) Health impact: which event types cause the most fatalities / injuries?
   aggregate(fatalities) -> rank -> top N
   aggregate(injuries)   -> rank -> top N
2) Economic impact: which event types cause the most damage?
   normalize damage -> aggregate(total_damage) -> rank -> top N

Every analysis is a plain function of the record tuple it is given. The
`StormHarm` session object only keeps the loaded table and the CLI command
log around; it never changes the records.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
import logging
from .aggregate import aggregate, grand_total
from .damage import normalize_events
from .models import AggregateRow, StormEvent
from .ranking import rank, top

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class AnalysisConfig:
    """Knobs for the two analyses."""
    top_n: int = 10

@dataclass(frozen=True)
class HealthImpact:
    fatalities: Tuple[AggregateRow, ...]
    injuries: Tuple[AggregateRow, ...]

@dataclass(frozen=True)
class EconomicImpact:
    damage: Tuple[AggregateRow, ...]

@dataclass(frozen=True)
class ImpactResult:
    """Everything the renderers need: the three ranked tables."""
    health: HealthImpact
    economic: EconomicImpact
    n_events: int
    top_n: int

    def tables(self) -> Dict[str, Tuple[AggregateRow, ...]]:
        return {
            "fatalities": self.health.fatalities,
            "injuries": self.health.injuries,
            "damage": self.economic.damage,
        }

    def is_empty(self) -> bool:
        return not any(self.tables().values())

def ranked_top(events: Iterable[StormEvent], metric: str, n: int) -> Tuple[AggregateRow, ...]:
    """aggregate -> rank (descending) -> top n."""
    rows = aggregate(events, metric)
    return tuple(top(rank(rows, descending=True), n))

def health_impact(events: Sequence[StormEvent], n: int = 10) -> HealthImpact:
    fatalities = ranked_top(events, "fatalities", n)
    injuries = ranked_top(events, "injuries", n)
    logger.info("Health impact over %d events: top fatalities=%s, top injuries=%s",
                len(events), _head(fatalities), _head(injuries))
    return HealthImpact(fatalities=fatalities, injuries=injuries)

def economic_impact(events: Sequence[StormEvent], n: int = 10) -> EconomicImpact:
    normalized = normalize_events(events)
    damage = ranked_top(normalized, "total_damage", n)
    logger.info("Economic impact over %d events: top damage=%s", len(events), _head(damage))
    return EconomicImpact(damage=damage)

def analyze(events: Sequence[StormEvent], config: Optional[AnalysisConfig] = None) -> ImpactResult:
    """Run both analyses over the same record set."""
    config = config or AnalysisConfig()
    return ImpactResult(
        health=health_impact(events, config.top_n),
        economic=economic_impact(events, config.top_n),
        n_events=len(events),
        top_n=config.top_n,
    )

@dataclass
class StormHarm:
    """Interactive session over one loaded storm table.

    The engine stores:
    - events: all StormEvent records (a tuple, never modified)
    - normalized: the same records with damage fields filled in
    - command_log: CLI commands, for the report footer
    """
    events: Tuple[StormEvent, ...]
    config: AnalysisConfig = field(default_factory=AnalysisConfig)
    dataset_path: Optional[str] = None
    # Stores CLI commands (for reproducibility in reports)
    command_log: List[str] = field(default_factory=list)
    normalized: Tuple[StormEvent, ...] = field(init=False)

    def __post_init__(self) -> None:
        self.events = tuple(self.events)
        self.normalized = tuple(normalize_events(self.events))

    # ---------------- Analyses ----------------
    def health(self, n: Optional[int] = None) -> HealthImpact:
        return health_impact(self.events, self._n(n))

    def economic(self, n: Optional[int] = None) -> EconomicImpact:
        # reuse the normalized copy instead of normalizing per call
        damage = ranked_top(self.normalized, "total_damage", self._n(n))
        return EconomicImpact(damage=damage)

    def analyze(self, n: Optional[int] = None) -> ImpactResult:
        n = self._n(n)
        return ImpactResult(health=self.health(n), economic=self.economic(n),
                            n_events=len(self.events), top_n=n)

    def table(self, name: str, n: Optional[int] = None) -> Tuple[AggregateRow, ...]:
        """One ranked table by name: fatalities | injuries | damage."""
        name = name.lower().strip()
        if name in ("fatalities", "deaths"):
            return ranked_top(self.events, "fatalities", self._n(n))
        if name == "injuries":
            return ranked_top(self.events, "injuries", self._n(n))
        if name in ("damage", "total_damage", "economic"):
            return ranked_top(self.normalized, "total_damage", self._n(n))
        raise ValueError("table must be: fatalities, injuries, damage")

    # ---------------- Inspection ----------------
    def event_types(self, prefix: str = "") -> List[str]:
        seen = {e.event_type for e in self.events}
        p = prefix.lower()
        return sorted(v for v in seen if v.lower().startswith(p))

    def stats(self) -> Dict[str, float]:
        return {
            "events": len(self.events),
            "event_types": len({e.event_type for e in self.events}),
            "fatalities": grand_total(aggregate(self.events, "fatalities")),
            "injuries": grand_total(aggregate(self.events, "injuries")),
            "total_damage": grand_total(aggregate(self.normalized, "total_damage")),
        }

    def _n(self, n: Optional[int]) -> int:
        return self.config.top_n if n is None else n

# ---------------- Export ----------------
def export_csv(rows: Sequence[AggregateRow], path: str, metric: str = "total") -> None:
    import csv
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["rank", "event_type", metric])
        for i, r in enumerate(rows, start=1):
            w.writerow([i, r.event_type, r.total])

def export_json(rows: Sequence[AggregateRow], path: str, metric: str = "total") -> None:
    """Export a ranked table to JSON (a list of objects, in rank order)."""
    import json
    payload = [
        {"rank": i, "event_type": r.event_type, metric: r.total}
        for i, r in enumerate(rows, start=1)
    ]
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)

# ---------------- Helpers ----------------
def _head(rows: Sequence[AggregateRow]) -> str:
    return f"{rows[0].event_type} ({rows[0].total:,.0f})" if rows else "none"
