"""
Tests for the runner, CLI and interactive session.
"""

import json
import pytest

from .cli import format_result_summary, main
from .config import CalculatorSpec
from .model import CalculatorConfig, CheckSizeTable, ServerProfile
from .runner import Runner, generate_output_filename, load_result, save_result
from .session import CalculatorSession


SCENARIO = {
    "name": "Corner Bistro",
    "servers": [
        {"name": "Ana", "wage": 4.74, "phone_time_pct": 15, "tip_pct": 18,
         "hours": [{"lunch": 5, "dinner": 5}] * 7},
        {"name": "Ben", "wage": 6.50, "phone_time_pct": 20, "tip_pct": 16,
         "hours": [{"lunch": 0, "dinner": 6}] * 5 + [{"lunch": 4, "dinner": 6}] * 2},
    ],
    "business": {"plan_price": 599, "automation_coverage_pct": 70},
}


@pytest.fixture
def scenario_file(tmp_path):
    path = tmp_path / "bistro.json"
    path.write_text(json.dumps(SCENARIO))
    return path


class TestRunner:
    def test_run_produces_results(self):
        result = Runner(CalculatorSpec.from_dict(SCENARIO)).run()
        assert result.meta["scenario_name"] == "Corner Bistro"
        assert len(result.results.server_impacts) == 2
        assert result.config["business"]["plan_price"] == 599

    def test_invalid_config_raises(self):
        with pytest.raises(ValueError, match="Invalid config"):
            Runner(CalculatorSpec.from_dict(dict(SCENARIO, servers=[])))

    def test_phone_time_override(self):
        result = Runner(CalculatorSpec.from_dict(SCENARIO), phone_time_pct=25).run()
        assert result.results.summary.phone_time_pct == 25

    def test_phone_time_override_clamped(self):
        low = Runner(CalculatorSpec.from_dict(SCENARIO), phone_time_pct=-20).run()
        high = Runner(CalculatorSpec.from_dict(SCENARIO), phone_time_pct=80).run()
        assert low.results.summary.phone_time_pct == 0
        assert low.results.summary.current_without == 0
        assert high.results.summary.phone_time_pct == 50

    def test_save_and_load(self, tmp_path):
        result = Runner(CalculatorSpec.from_dict(SCENARIO)).run()
        path = tmp_path / "out" / "result.json"
        save_result(result, path)
        data = load_result(path)
        assert data["meta"]["scenario_name"] == "Corner Bistro"
        assert len(data["results"]["sensitivity"]) == 21

    def test_output_filename(self):
        spec = CalculatorSpec.from_dict(SCENARIO)
        name = generate_output_filename(spec, "2026-10-18T09:30:00+00:00")
        assert name == "Corner_Bistro_20261018T093000.json"

    def test_summary_text(self):
        result = Runner(CalculatorSpec.from_dict(SCENARIO)).run()
        text = format_result_summary(result)
        assert "Corner Bistro" in text
        assert "Ana" in text and "Ben" in text
        assert "Sunday" in text
        assert "Payback" in text


class TestCli:
    def test_stdout_json(self, scenario_file, capsys):
        assert main([str(scenario_file), "--stdout"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["results"]["summary"]["current_without"] > 0

    def test_writes_output_file(self, scenario_file, tmp_path, capsys):
        out = tmp_path / "result.json"
        assert main([str(scenario_file), "-o", str(out), "-q"]) == 0
        assert json.loads(out.read_text())["meta"]["config_file"] == str(scenario_file)

    def test_missing_file_fails(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.json"), "--stdout"]) == 1
        assert "not found" in capsys.readouterr().err

    def test_invalid_config_fails(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(dict(SCENARIO, business={"plan_price": 123})))
        assert main([str(path), "--stdout"]) == 1
        assert "plan_price" in capsys.readouterr().err

    @pytest.mark.parametrize("data", [
        {"name": "x", "servers": [{"hours": 5}]},
        {"name": "x", "business": 5},
        {"name": "x", "servers": "Ana"},
        {"name": "x", "check_sizes": {"lunch": 25}},
        [1, 2],
    ])
    def test_malformed_config_fails_cleanly(self, tmp_path, capsys, data):
        path = tmp_path / "malformed.json"
        path.write_text(json.dumps(data))
        assert main([str(path), "--stdout"]) == 1
        assert "Invalid config" in capsys.readouterr().err

    def test_negative_phone_time_clamped(self, scenario_file, capsys):
        assert main([str(scenario_file), "--stdout", "--phone-time", "-20"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["results"]["summary"]["phone_time_pct"] == 0

    def test_output_with_multiple_configs_rejected(self, scenario_file):
        with pytest.raises(SystemExit):
            main([str(scenario_file), str(scenario_file), "-o", "x.json"])


class TestCalculatorSession:
    """Tests for replace-on-change state and phone-time reconciliation."""

    @pytest.fixture
    def session(self):
        server = ServerProfile(name="Server 1", phone_time_pct=15, hours=((5, 5),) * 7)
        return CalculatorSession(CalculatorConfig(servers=(server,)))

    def test_initial_selection_is_derived(self, session):
        assert session.selection.value == 15
        assert not session.selection.overridden
        assert session.config.phone_time_pct == 15

    def test_initial_override_from_config(self):
        session = CalculatorSession(CalculatorConfig(phone_time_pct=22))
        assert session.selection.overridden
        assert session.result.summary.phone_time_pct == 22

    def test_updates_replace_config(self, session):
        before = session.config
        session.update_business(plan_price=599)
        assert session.config is not before
        assert before.business.plan_price == 399
        assert session.config.business.plan_price == 599

    def test_small_estimate_change_keeps_selection(self, session):
        session.update_server(0, phone_time_pct=16)
        assert session.selection.value == 15

    def test_large_estimate_change_adopted(self, session):
        session.update_server(0, phone_time_pct=20)
        assert session.selection.value == 20
        assert session.result.summary.phone_time_pct == 20

    def test_override_kept_within_hysteresis(self, session):
        session.override_phone_time(16)
        session.set_hours(0, 0, 0, 6)
        assert session.selection.overridden
        assert session.selection.value == 16

    def test_override_replaced_by_distant_estimate(self, session):
        session.override_phone_time(24)
        session.update_server(0, phone_time_pct=14)
        assert not session.selection.overridden
        assert session.selection.value == 14

    def test_override_clamped(self, session):
        session.override_phone_time(75)
        assert session.selection.value == 50

    def test_non_server_changes_do_not_reconcile(self, session):
        session.override_phone_time(24)
        session.update_check_sizes(CheckSizeTable(lunch=(30,) * 7, dinner=(40,) * 7))
        assert session.selection.value == 24

    def test_add_and_remove_server(self, session):
        session.add_server()
        assert [s.name for s in session.config.servers] == ["Server 1", "Server 2"]
        session.remove_server()
        session.remove_server()
        assert len(session.config.servers) == 1

    def test_set_hours(self, session):
        session.set_hours(0, 6, 1, 8)
        assert session.config.servers[0].hours[6] == (5, 8)
        assert session.config.servers[0].hours[5] == (5, 5)
