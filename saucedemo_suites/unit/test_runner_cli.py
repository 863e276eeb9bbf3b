import sys

import run_tests
from run_tests import SUITES, build_pytest_command, marker_expression, parse_args


def option_value(cmd, flag):
    """Value following ``flag``, skipping the ``python -m pytest <path>`` prefix."""
    return cmd[cmd.index(flag, 4) + 1]


def test_marker_expression_combines_suite_and_tags():
    assert marker_expression(SUITES["unit"], []) is None
    assert marker_expression(SUITES["unit"], ["P0", "smoke"]) == "P0 or smoke"
    assert marker_expression(SUITES["e2e"], []) == "e2e"
    assert marker_expression(SUITES["e2e"], ["P0", "smoke"]) == "(e2e) and (P0 or smoke)"


def test_e2e_command_passes_engines_and_headed():
    options = parse_args(
        ["--suite", "e2e", "--engine", "firefox", "--engine", "edge", "--no-headless", "-n", "4"]
    )

    cmd = build_pytest_command(options)

    assert cmd[:4] == [sys.executable, "-m", "pytest", "saucedemo_suites/ui_testing/tests"]
    assert option_value(cmd, "-m") == "e2e"
    assert option_value(cmd, "-n") == "4"
    assert "--engine=firefox" in cmd and "--engine=edge" in cmd
    assert "--headed" in cmd
    assert "--alluredir" in cmd


def test_unit_command_has_no_browser_options():
    cmd = build_pytest_command(parse_args(["--engine", "edge", "--no-headless", "--no-allure"]))

    assert "saucedemo_suites/unit" in cmd
    assert "--engine=edge" not in cmd
    assert "--headed" not in cmd
    assert "--alluredir" not in cmd
    assert "-q" in cmd


def test_all_suite_includes_e2e():
    cmd = build_pytest_command(parse_args(["--suite", "all", "-v"]))

    assert option_value(cmd, "-m") == "e2e or not e2e"
    assert "-v" in cmd


def test_missing_allure_cli_is_not_fatal(monkeypatch, tmp_path):
    def missing(*args, **kwargs):
        raise FileNotFoundError("allure")

    monkeypatch.setattr(run_tests, "REPORTS_DIR", tmp_path)
    monkeypatch.setattr(run_tests.subprocess, "run", missing)

    assert run_tests.generate_allure_report() is None
