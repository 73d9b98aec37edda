"""
Merge — объединение остановленных сессий одного владельца

Источники упорядочиваются по started_at. Итоговая сессия:
- started_at = min, ended_at = max
- duration = Σ длительностей источников
- балансы ledger, агрегаты предметов, атрибуция, gathering и прирост
  прогресса суммируются
- лоты holdings конкатенируются в порядке старта источников
- baseline прогресса сбрасываются (merged сессия не продолжает наблюдения)

Проверки допустимости (владелец, активность, архив) выполняет
SessionManager до вызова.
"""

from typing import Sequence

from goldph.core.domain.holding import Holding
from goldph.core.domain.session import ProgressTrack, Session


def _add_counts(target: dict[str, int], source: dict[str, int]) -> None:
    for key, value in source.items():
        target[key] = target.get(key, 0) + value


def _merge_track(target: ProgressTrack, source: ProgressTrack) -> None:
    target.gained += source.gained
    target.enabled = target.enabled or source.enabled
    target.kills += source.kills
    _add_counts(target.by_source, source.by_source)


def merge_sessions(sources: Sequence[Session], session_id: int, now: float) -> Session:
    """
    Построить новую остановленную сессию из источников.

    Источники не изменяются: все данные копируются.
    """
    ordered = sorted(sources, key=lambda s: s.started_at)
    first = ordered[0]

    merged = Session(
        session_id=session_id,
        owner=first.owner,
        zone=first.zone,
        started_at=min(s.started_at for s in ordered),
        ended_at=max(s.ended_at if s.ended_at is not None else s.started_at for s in ordered),
        merged_at=now,
    )
    merged.ledger = {}

    for source in ordered:
        merged.merged_from.append(source.session_id)
        merged.duration_sec += source.duration_sec

        _add_counts(merged.ledger, source.ledger)

        for item_id, aggregate in source.items.items():
            existing = merged.items.get(item_id)
            if existing is None:
                merged.items[item_id] = aggregate.model_copy()
            else:
                existing.count += aggregate.count
                existing.count_looted += aggregate.count_looted
                existing.expected_total += aggregate.expected_total

        for item_id, holding in source.holdings.items():
            target = merged.holdings.setdefault(item_id, Holding())
            # Лоты immutable, копирование не требуется
            target.lots.extend(holding.lots)
            target.count += holding.count

        attribution = merged.attribution
        src_attribution = source.attribution
        attribution.pickpocket_coin += src_attribution.pickpocket_coin
        attribution.pickpocket_value += src_attribution.pickpocket_value
        attribution.containers_looted += src_attribution.containers_looted
        attribution.containers_opened += src_attribution.containers_opened
        attribution.from_container_coin += src_attribution.from_container_coin
        attribution.from_container_value += src_attribution.from_container_value

        merged.gathering.total_nodes += source.gathering.total_nodes
        _add_counts(merged.gathering.by_node, source.gathering.by_node)

        _merge_track(merged.progress.xp, source.progress.xp)
        _merge_track(merged.progress.rep, source.progress.rep)
        _merge_track(merged.progress.honor, source.progress.honor)

    merged.accumulated_duration = merged.duration_sec
    return merged
