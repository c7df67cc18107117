from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
import sys

import streamlit as st

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from mockrobot.fleet import Fleet
from mockrobot.loader import load_plan, plan_from_data
from mockrobot.models import Command, RobotFault, TrialPlan
from mockrobot.runner import csv_row, write_csv, write_json
from mockrobot.trials import run_plan, run_trials

RESULTS_DIR = ROOT / "results"
PLAN_DIR = ROOT / "configs" / "trials"

REPORT_DOCS = {
    "success_rate": "Observed share of trials that did not end in a fault.",
    "expected_success_rate": "Policy rate: pick 1/5, place 1/3, home 1/2.",
    "fault_counts": "Faults raised, keyed by error kind.",
    "state_counts": "Final robot state after each trial.",
}


def _fleet() -> Fleet:
    if "fleet" not in st.session_state:
        st.session_state["fleet"] = Fleet()
        st.session_state["command_log"] = []
    return st.session_state["fleet"]


def _log_command(robot_id: str, command: str, outcome: str) -> None:
    st.session_state["command_log"].insert(
        0,
        {
            "time_utc": datetime.now(timezone.utc).strftime("%H:%M:%S"),
            "robot": robot_id[:8],
            "command": command,
            "outcome": outcome,
        },
    )


def _issue(fleet: Fleet, robot_id: str, command: str, location: tuple[int, int, int]) -> None:
    try:
        if command == "home":
            fleet.home(robot_id)
        elif command == "pick":
            fleet.pick(robot_id, location)
        elif command == "place":
            fleet.place(robot_id, location)
        else:
            fleet.disconnect(robot_id)
    except RobotFault as fault:
        _log_command(robot_id, command, f"fault: {fault}")
        st.warning(f"{command} failed: {fault}")
    else:
        _log_command(robot_id, command, "ok")


def _render_report_cards(reports: list[dict]) -> None:
    columns = st.columns(max(1, len(reports)))
    for column, report in zip(columns, reports):
        column.metric(
            report["command"],
            f"{report['success_rate']:.3f}",
            delta=f"{report['success_rate'] - report['expected_success_rate']:+.3f} vs expected",
            delta_color="off",
        )
        column.caption(f"{report['successes']}/{report['trials']} succeeded")

    st.bar_chart(
        {
            "observed": {r["command"]: r["success_rate"] for r in reports},
            "expected": {r["command"]: r["expected_success_rate"] for r in reports},
        },
        height=200,
    )


def _render_robot_console(fleet: Fleet) -> None:
    st.subheader("Robot Console")
    c1, c2 = st.columns([1, 3])
    if c1.button("Connect robot"):
        robot = fleet.connect()
        _log_command(robot.id, "connect", "ok")

    robot_ids = fleet.robot_ids()
    if not robot_ids:
        st.info("No robots connected.")
        return

    robot_id = c2.selectbox("Robot", robot_ids)
    robot = fleet.get(robot_id)
    s1, s2, s3 = st.columns(3)
    s1.metric("State", str(robot.state))
    s2.metric("Action", robot.action)
    s3.metric("Location", str(robot.location))

    x, y, z = st.columns(3)
    location = (
        int(x.number_input("X", value=0, step=1)),
        int(y.number_input("Y", value=0, step=1)),
        int(z.number_input("Z", value=0, step=1)),
    )

    b1, b2, b3, b4 = st.columns(4)
    if b1.button("Home"):
        _issue(fleet, robot_id, "home", location)
    if b2.button("Pick"):
        _issue(fleet, robot_id, "pick", location)
    if b3.button("Place"):
        _issue(fleet, robot_id, "place", location)
    if b4.button("Disconnect"):
        _issue(fleet, robot_id, "disconnect", location)

    if st.session_state["command_log"]:
        st.dataframe(st.session_state["command_log"], width="stretch")


def _render_trials(persist_results: bool) -> None:
    st.subheader("Outcome Trials")
    with st.expander("What do the columns mean?", expanded=False):
        st.markdown("\n".join([f"- `{k}`: {v}" for k, v in REPORT_DOCS.items()]))

    plan_paths = sorted(PLAN_DIR.glob("*.json"))
    source = st.radio("Source", ["Single command", "Plan file", "Plan JSON"], horizontal=True)
    seed = int(st.number_input("Seed", min_value=0, value=0, step=1))

    plan: TrialPlan | None = None
    command: Command = "pick"
    trials = 1000
    if source == "Single command":
        command = st.selectbox("Command", ["home", "pick", "place"])
        trials = int(st.number_input("Trials", min_value=1, value=1000, step=100))
    elif source == "Plan file":
        if not plan_paths:
            st.error("No plan files found under configs/trials.")
            return
        plan_path = st.selectbox("Plan", [str(path) for path in plan_paths])
        plan = load_plan(plan_path)
    else:
        default_text = plan_paths[0].read_text(encoding="utf-8") if plan_paths else "{}"
        text = st.text_area("Plan JSON", value=default_text, height=220)

    if not st.button("Run trials", type="primary"):
        return

    try:
        if source == "Plan JSON":
            plan = plan_from_data(json.loads(text))
        if plan is None:
            reports = [run_trials(command=command, trials=trials, seed=seed).to_dict()]
            plan_name = f"{command} trials"
        else:
            reports = [report.to_dict() for report in run_plan(plan, seed=seed)]
            plan_name = plan.name
    except (ValueError, KeyError, json.JSONDecodeError) as exc:
        st.error(f"Trial run failed: {exc}")
        return

    _render_report_cards(reports)
    st.dataframe([csv_row(plan_name, report) for report in reports], width="stretch")

    if persist_results:
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        slug = plan_name.lower().replace(" ", "_")
        json_path = RESULTS_DIR / f"{slug}_{timestamp}.json"
        csv_path = RESULTS_DIR / f"{slug}_{timestamp}.csv"
        write_json(json_path, {"plan": plan_name, "seed": seed, "reports": reports})
        write_csv(csv_path, [csv_row(plan_name, report) for report in reports])
        st.caption(f"Saved: {json_path}, {csv_path}")


def main() -> None:
    st.set_page_config(page_title="Mock Robot", layout="wide")
    st.title("Mock Robot Actuator")
    st.caption("Command a simulated arm and measure its injected failure rates")

    persist_results = st.sidebar.checkbox("Save trial results under results/", value=False)
    fleet = _fleet()
    st.sidebar.metric("Connected robots", str(len(fleet)))

    console_tab, trials_tab = st.tabs(["Console", "Trials"])
    with console_tab:
        _render_robot_console(fleet)
    with trials_tab:
        _render_trials(persist_results)


if __name__ == "__main__":
    main()
