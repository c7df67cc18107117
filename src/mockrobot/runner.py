from __future__ import annotations

import argparse
import csv
import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from mockrobot.loader import load_plan
from mockrobot.models import CommandSpec, TrialPlan, as_location
from mockrobot.trials import run_plan

logger = logging.getLogger(__name__)


def write_json(path: Path, payload: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def write_csv(path: Path, rows: list[dict]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if not rows:
        return
    fieldnames = list(rows[0].keys())
    with path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)


def csv_row(plan_name: str, report: dict) -> dict:
    row = {"plan": plan_name}
    for key, value in report.items():
        if isinstance(value, dict):
            row[key] = json.dumps(value, sort_keys=True)
        else:
            row[key] = value
    return row


def run_trial_plan(
    plan: TrialPlan,
    output_dir: str,
    seed: int | None = None,
    slug: str | None = None,
) -> dict:
    run_seed = plan.seed if seed is None else seed
    reports = run_plan(plan, seed=run_seed)
    for report in reports:
        logger.info(
            "%s: %d/%d succeeded (observed %.4f, expected %.4f)",
            report.command,
            report.successes,
            report.trials,
            report.success_rate,
            report.expected_success_rate,
        )

    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    out_dir = Path(output_dir)
    plan_slug = slug or plan.name.lower().replace(" ", "_")
    json_out = out_dir / f"{plan_slug}_trials.json"
    csv_out = out_dir / f"{plan_slug}_trials.csv"

    rows = [report.to_dict() for report in reports]
    write_csv(csv_out, [csv_row(plan.name, row) for row in rows])
    payload = {
        "plan": plan.name,
        "seed": run_seed,
        "generated_at_utc": timestamp,
        "reports": rows,
        "csv": str(csv_out),
        "json": str(json_out),
    }
    write_json(json_out, payload)
    return payload


def _plan_from_args(args: argparse.Namespace) -> tuple[TrialPlan, str]:
    if args.plan:
        plan = load_plan(args.plan)
        if args.trials is not None:
            plan = TrialPlan(
                name=plan.name,
                seed=plan.seed,
                commands=[
                    CommandSpec(command=spec.command, location=spec.location, trials=args.trials)
                    for spec in plan.commands
                ],
                trials=args.trials,
            )
        return plan, Path(args.plan).stem

    if not args.command:
        raise SystemExit("--plan or --command is required")

    plan = TrialPlan(
        name=f"{args.command} trials",
        seed=0,
        commands=[
            CommandSpec(
                command=args.command,
                location=as_location(args.location),
                trials=args.trials,
            )
        ],
        trials=args.trials if args.trials is not None else 1000,
    )
    return plan, args.command


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Mock robot outcome trial runner")
    parser.add_argument("--plan", help="Path to trial plan JSON file")
    parser.add_argument(
        "--command",
        choices=["home", "pick", "place"],
        default=None,
        help="Single command to trial when no plan is given",
    )
    parser.add_argument("--trials", type=int, default=None, help="Override trial count")
    parser.add_argument("--seed", type=int, default=None, help="Override plan seed")
    parser.add_argument(
        "--location",
        type=int,
        nargs=3,
        default=[0, 0, 0],
        metavar=("X", "Y", "Z"),
        help="Target location for pick/place",
    )
    parser.add_argument(
        "--output-dir",
        default="results",
        help="Directory for JSON/CSV outputs",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    plan, slug = _plan_from_args(args)
    payload = run_trial_plan(plan, output_dir=args.output_dir, seed=args.seed, slug=slug)
    print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
