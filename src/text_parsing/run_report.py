"""Run the complete league report.

Parses pasted transfer text (and optionally a league template and a squad
page), merges newly inferred managers into the league, simulates every
manager's cash flow and writes the results.

Usage:
    python -m src.text_parsing.run_report league.json transfers.txt [options]

Examples:
    python -m src.text_parsing.run_report data/league.json data/transfers.txt
    python -m src.text_parsing.run_report data/league.json data/transfers.txt \\
        --squad data/squad.txt --granularity day
"""

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from src.cash_flow.models import LeagueStats, ManagerSummary, RankedTransfer, SimulationConfig
from src.cash_flow.simulator import CashFlowSimulator
from src.league_manager.league_state import LeagueData, Transfer
from src.league_manager.sale_advisor import SaleAdvisor
from src.logging_config import setup_logging
from src.text_parsing.config import REPORTS_DIR
from src.text_parsing.squad_parser import parse_squad
from src.text_parsing.template_parser import parse_template
from src.text_parsing.transfer_parser import parse_transfers

logger = logging.getLogger(__name__)


class LeagueDataError(Exception):
    """Raised when the league document cannot be used for a report."""


def _read_text(path: Path) -> str:
    if not path.is_file():
        raise FileNotFoundError(f"Input file not found: {path}")
    return path.read_text(encoding="utf-8")


def load_league(
    league_path: Optional[Path],
    template_path: Optional[Path] = None,
) -> tuple:
    """Load the league document and its stored transfers.

    A template, when given, replaces the document's teams (current values
    are kept for teams that still exist).

    Returns:
        ``(LeagueData, stored transfers)``.

    Raises:
        FileNotFoundError: if a given path does not exist.
        LeagueDataError: if no teams are available from either source.
    """
    data: Dict = {}
    if league_path is not None:
        data = json.loads(_read_text(league_path))

    league = LeagueData.from_dict(data)
    stored = [Transfer.from_dict(t) for t in data.get("transfers") or []]

    if template_path is not None:
        parsed = parse_template(_read_text(template_path))
        for team in parsed.teams:
            previous = league.get_team(team.name)
            if previous is not None:
                team.current_value = previous.current_value
        league.teams = parsed.teams
        league.type = parsed.type

    if not league.teams:
        raise LeagueDataError(
            "League has no teams; supply a league document with teams or a template"
        )
    return league, stored


def _ranked_to_dict(ranked: RankedTransfer) -> dict:
    out = ranked.transfer.to_dict()
    out["percent"] = ranked.percent
    return out


def _manager_to_dict(m: ManagerSummary) -> dict:
    return {
        "name": m.name,
        "teamName": m.team_name,
        "initialValue": m.initial_value,
        "currentValue": m.current_value,
        "initialCash": m.initial_cash,
        "spent": m.spent,
        "income": m.income,
        "count": m.count,
        "transferNet": m.transfer_net,
        "cash": m.cash,
        "totalAssets": m.total_assets,
        "evolution": m.evolution,
        "avgPremium": m.avg_premium,
        "avgProfit": m.avg_profit,
        "cashFlow": [
            {"round": s.round, "day": s.day, "cash": s.cash} for s in m.cash_flow
        ],
    }


def stats_to_dict(stats: LeagueStats) -> dict:
    """Convert :class:`LeagueStats` to the report JSON structure."""
    return {
        "totalSpent": stats.total_spent,
        "totalIncome": stats.total_income,
        "avgPurchasePrice": stats.avg_purchase_price,
        "avgSalePrice": stats.avg_sale_price,
        "managerList": [_manager_to_dict(m) for m in stats.manager_list],
        "panicBuys": [_ranked_to_dict(r) for r in stats.panic_buys],
        "masterSales": [_ranked_to_dict(r) for r in stats.master_sales],
        "mostTraded": [{"name": t.name, "count": t.count} for t in stats.most_traded],
    }


def run_report(
    transfers_path: Path,
    league_path: Optional[Path] = None,
    template_path: Optional[Path] = None,
    squad_path: Optional[Path] = None,
    output_dir: Optional[Path] = None,
    config: Optional[SimulationConfig] = None,
    use_known_teams: bool = False,
) -> Path:
    """Build the league report.

    Args:
        transfers_path: Pasted transfer text to parse.
        league_path: League document JSON (teams, managersByTeam and
            optionally previously stored ``transfers``).
        template_path: League template text; replaces the document's teams.
        squad_path: Squad page text; enables sale recommendations.
        output_dir: Directory for ``report.json`` and ``cash_flow.csv``.
            Defaults to ``data/reports/``.
        config: Simulation strategy. Defaults to the round-level model.
        use_known_teams: Resolve ambiguous transfer blocks only against the
            league's team names.

    Returns:
        Path to the generated JSON report.
    """
    if output_dir is None:
        output_dir = REPORTS_DIR
    config = config or SimulationConfig()

    logger.info("Step 1/4: Loading league...")
    league, stored = load_league(league_path, template_path)
    logger.info(
        "Loaded league %r: %d teams (%s), %d stored transfers",
        league.name, len(league.teams), league.type, len(stored),
    )

    logger.info("Step 2/4: Parsing transfers...")
    parsed = parse_transfers(
        _read_text(transfers_path),
        league_teams=league.team_names() if use_known_teams else None,
    )
    if parsed.managers_by_team:
        league = league.merge_managers(parsed.managers_by_team)
    if not parsed.transfers:
        logger.warning("No valid transfers found in %s", transfers_path)
    all_transfers: List[Transfer] = stored + parsed.transfers

    logger.info("Step 3/4: Simulating cash flow (%s level)...", config.granularity)
    stats = CashFlowSimulator(config).calculate(all_transfers, league)

    recommendations = []
    if squad_path is not None:
        squad = parse_squad(_read_text(squad_path))
        recommendations = SaleAdvisor(all_transfers).recommend(squad)

    logger.info("Step 4/4: Writing report...")
    report = {
        "metadata": {
            "version": "1.0",
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "league": league.name,
            "granularity": config.granularity,
            "total_transfers": len(all_transfers),
            "new_transfers": len(parsed.transfers),
        },
        "league": league.to_dict(),
        "transfers": [t.to_dict() for t in all_transfers],
        "stats": stats_to_dict(stats),
        "recommendations": [r.to_dict() for r in recommendations],
    }

    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / "report.json"
    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(report, f, indent=2)

    stats.snapshots_frame().to_csv(output_dir / "cash_flow.csv", index=False)

    logger.info("Report complete! Output: %s", output_file)
    logger.info(
        "  Managers: %d, spent %.1fM, income %.1fM",
        len(stats.manager_list), stats.total_spent, stats.total_income,
    )
    return output_file


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build a league finance report.")
    parser.add_argument("league", type=Path, help="League document JSON")
    parser.add_argument("transfers", type=Path, help="Pasted transfer text")
    parser.add_argument("--template", type=Path, help="League template text")
    parser.add_argument("--squad", type=Path, help="Squad page text")
    parser.add_argument("--output-dir", type=Path, help="Report directory")
    parser.add_argument(
        "--granularity", choices=["round", "day"], default="round",
        help="Simulation granularity (default: round)",
    )
    parser.add_argument(
        "--use-known-teams", action="store_true",
        help="Resolve ambiguous blocks against the league's team names",
    )
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--log-dir", type=Path, help="Log directory (default: logs/)")
    return parser


if __name__ == "__main__":
    args = _build_arg_parser().parse_args()
    setup_logging(args.log_level, args.log_dir)

    sim_config = (
        SimulationConfig.day_level() if args.granularity == "day"
        else SimulationConfig.round_level()
    )
    try:
        output = run_report(
            transfers_path=args.transfers,
            league_path=args.league,
            template_path=args.template,
            squad_path=args.squad,
            output_dir=args.output_dir,
            config=sim_config,
            use_known_teams=args.use_known_teams,
        )
        print(f"Report complete: {output}")
    except Exception:
        logger.exception("Report failed")
        sys.exit(1)
