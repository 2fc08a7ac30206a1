"""
Post-load data-quality checks.

Historical game logs reference people, parks and teams that the code files
do not always list. These checks report such gaps as DataQualityIssue
warnings; they never raise.
"""

from __future__ import annotations

import logging
import sqlite3
from collections import defaultdict
from typing import Dict, List, Tuple

from .schemas import DataQualityIssue
from .store import foreign_key_violations

logger = logging.getLogger(__name__)


def check_foreign_keys(conn: sqlite3.Connection) -> List[DataQualityIssue]:
    groups: Dict[Tuple[str, str, str], List[object]] = defaultdict(list)
    for table, _rowid, parent, col, value in foreign_key_violations(conn):
        groups[(table, col, parent)].append(value)

    issues: List[DataQualityIssue] = []
    for (table, col, parent), values in sorted(groups.items()):
        distinct = sorted({str(v) for v in values})
        issue = DataQualityIssue(
            kind="foreign_key",
            table=table,
            message=f"{len(values)} {table}.{col} value(s) not found in {parent}",
            count=len(values),
            examples=distinct[:10],
        )
        logger.warning("%s (e.g. %s)", issue.message, ", ".join(issue.examples))
        issues.append(issue)
    return issues


_PAIR_SQL = """
SELECT game_id,
       COUNT(*) AS n,
       SUM(CASE WHEN home THEN 1 ELSE 0 END) AS n_home,
       COUNT(DISTINCT team_id) AS n_teams
FROM team_appearance
GROUP BY game_id
HAVING n != 2 OR n_home != 1 OR n_teams != 2
"""


def check_team_appearance_pairs(conn: sqlite3.Connection) -> List[DataQualityIssue]:
    """Every game should have one home and one visitor row for two distinct teams."""
    bad = [r[0] for r in conn.execute(_PAIR_SQL).fetchall()]
    missing = conn.execute(
        "SELECT COUNT(*) FROM game g WHERE NOT EXISTS "
        "(SELECT 1 FROM team_appearance t WHERE t.game_id = g.game_id)"
    ).fetchone()[0]
    issues: List[DataQualityIssue] = []
    if bad:
        issues.append(
            DataQualityIssue(
                kind="team_pair",
                table="team_appearance",
                message=f"{len(bad)} game(s) without exactly one home and one visitor row",
                count=len(bad),
                examples=[str(g) for g in bad[:10]],
            )
        )
    if missing:
        issues.append(
            DataQualityIssue(
                kind="team_pair",
                table="team_appearance",
                message=f"{missing} game(s) with no team_appearance rows",
                count=int(missing),
            )
        )
    for issue in issues:
        logger.warning(issue.message)
    return issues
