"""Standings calculator: snapshot fetch + pure engine"""
from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional

from leaguedesk.standings.engine import (
    StandingsConfig,
    StandingsError,
    StandingsTable,
    compute_standings,
)
from leaguedesk.standings.data_adapter import (
    DataUnavailable,
    StandingsSnapshot,
    fetch_active_championship_ids,
    fetch_standings_snapshot,
)

logger = logging.getLogger(__name__)


def compute_from_snapshot(
    snapshot: StandingsSnapshot,
    cfg: Optional[StandingsConfig] = None,
) -> StandingsTable:
    """Run the engine over an already-fetched snapshot"""
    table = compute_standings(
        rules=snapshot.rules,
        teams=snapshot.teams,
        matches=snapshot.matches,
        cfg=cfg,
        championship_id=snapshot.championship.id,
    )

    if table.unknown_references:
        logger.warning(
            f"⚠️ {len(table.unknown_references)} match sides referenced unregistered teams "
            f"in {snapshot.championship.name}"
        )
    return table


async def compute_championship_standings(
    supabase_client,
    championship_id: str,
    cfg: Optional[StandingsConfig] = None,
) -> StandingsTable:
    """
    Fetch a championship snapshot from Supabase and compute its table.

    Raises:
        DataUnavailable: the snapshot could not be fetched
        MissingScoringRules / IncompleteMatchData: the snapshot cannot be ranked
    """
    logger.info(f"🔍 Fetching standings snapshot for championship {championship_id}...")
    snapshot = await fetch_standings_snapshot(supabase_client, championship_id)

    logger.info("⚙️  Running standings engine...")
    table = compute_from_snapshot(snapshot, cfg)
    logger.info(f"✅ Standings computed: {len(table)} teams ranked")
    return table


async def compute_all_championships(
    supabase_client,
    cfg: Optional[StandingsConfig] = None,
) -> Dict[str, Dict]:
    """
    Compute standings for every active championship.

    Each championship is computed independently; a failure is reported for
    that championship only. Malformed records (ValueError from the record
    converters) count as a failure of their championship.

    Returns:
        {
            "tables": {championship_id: StandingsTable},
            "failures": {championship_id: exception}
        }
    """
    championship_ids = await fetch_active_championship_ids(supabase_client)
    logger.info(f"🔄 Computing standings for {len(championship_ids)} active championships")

    results = await asyncio.gather(
        *(compute_championship_standings(supabase_client, cid, cfg) for cid in championship_ids),
        return_exceptions=True,
    )

    tables = {}
    failures = {}
    for cid, result in zip(championship_ids, results):
        if isinstance(result, (DataUnavailable, StandingsError, ValueError)):
            logger.error(f"❌ Championship {cid}: {result}")
            failures[cid] = result
        elif isinstance(result, BaseException):
            raise result
        else:
            tables[cid] = result

    logger.info(f"✅ {len(tables)} tables computed, {len(failures)} failed")
    return {"tables": tables, "failures": failures}
