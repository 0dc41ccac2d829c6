import json
import threading

import pytest

from prop_sim.monitoring import AuditLog, LogNotifier, MemoryNotifier, Monitor
from prop_sim.rule_engine import DrawdownType, ParameterSet, ValidationError
from prop_sim.simulator import BatchResult, BatchRunner, SimulationResult, run, run_seeds, summarize


def _batch_params(**overrides):
    values = dict(
        avg_win=200,
        avg_loss=100,
        win_rate=45,
        account_size=10000,
        number_of_trades=50,
        is_prop_firm=True,
        max_drawdown_percent=5,
        max_daily_loss_percent=2,
        trades_per_day=5,
        drawdown_type=DrawdownType.TRAILING,
        simulation_runs=60,
    )
    values.update(overrides)
    return ParameterSet(**values)


def test_batch_returned_for_prop_firm_runs():
    result = run(_batch_params(), seed=1)

    assert isinstance(result, BatchResult)
    assert result.requested_runs == 60
    assert result.simulation_runs == 60
    assert result.cancelled is False
    assert 0 <= result.fail_rate_percent <= 100
    assert result.fail_rate_percent == pytest.approx(result.failure_count / 60 * 100)
    assert result.pass_count == 60 - result.failure_count


def test_single_result_when_not_batch():
    assert isinstance(run(_batch_params(simulation_runs=1), seed=1), SimulationResult)
    assert isinstance(run(_batch_params(is_prop_firm=False), seed=1), SimulationResult)


def test_batch_is_independent_of_worker_count():
    params = _batch_params()
    serial = BatchRunner(max_workers=1).run(params, seed=99)
    pooled = BatchRunner(max_workers=4).run(params, seed=99)
    assert serial == pooled


def test_run_seeds_are_reproducible():
    assert run_seeds(5, seed=3) == run_seeds(5, seed=3)
    assert len(set(run_seeds(100, seed=3))) == 100


def test_looser_drawdown_fails_less():
    tight = run(_batch_params(max_drawdown_percent=1), seed=5)
    loose = run(_batch_params(max_drawdown_percent=100), seed=5)

    assert loose.failure_count == 0
    assert loose.fail_rate_percent <= tight.fail_rate_percent
    assert tight.fail_rate_percent > 50


def test_cancelled_before_start_reports_empty_batch():
    event = threading.Event()
    event.set()
    result = BatchRunner().run(_batch_params(), seed=1, cancel_event=event)

    assert result.cancelled is True
    assert result.simulation_runs == 0
    assert result.fail_rate_percent == 0.0
    assert result.pass_rate_percent == 0.0


def test_cancel_mid_batch_keeps_completed_runs():
    class StopAfterThree(BatchRunner):
        def __init__(self) -> None:
            super().__init__()
            self.calls = 0

        def _run_one(self, params, seed, cancel_event):
            self.calls += 1
            if self.calls > 3:
                cancel_event.set()
            return BatchRunner._run_one(params, seed, cancel_event)

    event = threading.Event()
    result = StopAfterThree().run(_batch_params(), seed=1, cancel_event=event)

    assert result.cancelled is True
    assert result.simulation_runs == 3
    assert result.requested_runs == 60
    assert 0 <= result.failure_count <= 3


def test_summarize_handles_counts():
    result = summarize(requested=10, completed=4, failures=1, cancelled=True)
    assert result.fail_rate_percent == 25.0
    assert result.pass_rate_percent == 75.0


def test_invalid_parameters_rejected_before_work():
    notifier = MemoryNotifier()
    with pytest.raises(ValidationError):
        run(_batch_params(win_rate=0), seed=1, monitor=Monitor(notifier))
    assert notifier.events == []


def test_workload_bound_enforced():
    with pytest.raises(ValidationError):
        run(_batch_params(simulation_runs=1000, number_of_trades=1000), max_total_trades=10000)


def test_batch_emits_audit_and_monitor_events(tmp_path):
    audit_path = tmp_path / "audit.log"
    notifier = MemoryNotifier()
    runner = BatchRunner(
        monitor=Monitor(notifier),
        audit_log=AuditLog(audit_path, run_id="test-run", config_hash="abc"),
    )
    result = runner.run(_batch_params(simulation_runs=10), seed=2)

    records = [json.loads(line) for line in audit_path.read_text(encoding="utf-8").splitlines()]
    assert [record["event"] for record in records] == ["batch_start", "batch_complete"]
    assert records[0]["run_id"] == "test-run"
    assert records[1]["payload"]["failure_count"] == result.failure_count
    assert notifier.codes()[-1] == "BATCH_COMPLETE"


def test_single_blown_run_notifies_monitor():
    notifier = MemoryNotifier()
    params = _batch_params(
        simulation_runs=1,
        win_rate=1,
        drawdown_type=DrawdownType.FIXED,
        fixed_drawdown_limit=150,
    )
    result = run(params, seed=4, monitor=Monitor(notifier))

    assert result.is_account_blown is True
    assert notifier.codes() == ["ACCOUNT_BLOWN"]


def test_pooled_cancel_before_start_reports_empty_batch():
    event = threading.Event()
    event.set()
    result = BatchRunner(max_workers=2).run(_batch_params(), seed=1, cancel_event=event)

    assert result.cancelled is True
    assert result.simulation_runs == 0
    assert result.fail_rate_percent == 0.0


def test_pooled_cancel_mid_batch_keeps_seed_prefix():
    class SetAfterThreeChecks(threading.Event):
        def __init__(self) -> None:
            super().__init__()
            self.checks = 0

        def is_set(self) -> bool:
            self.checks += 1
            return self.checks > 3

    params = _batch_params()
    result = BatchRunner(max_workers=2).run(params, seed=1, cancel_event=SetAfterThreeChecks())
    expected = [BatchRunner._run_one(params, run_seed, None) for run_seed in run_seeds(60, seed=1)[:3]]

    assert result.cancelled is True
    assert result.simulation_runs == 3
    assert result.failure_count == sum(expected)


def test_single_run_writes_simulation_complete_record(tmp_path):
    audit_path = tmp_path / "audit.log"
    result = run(
        ParameterSet(number_of_trades=40),
        seed=3,
        audit_log=AuditLog(audit_path, run_id="single", config_hash="abc"),
    )

    records = [json.loads(line) for line in audit_path.read_text(encoding="utf-8").splitlines()]
    assert [record["event"] for record in records] == ["simulation_complete"]
    assert records[0]["payload"] == {
        "final_balance": result.final_balance,
        "actual_trades_taken": result.actual_trades_taken,
        "is_account_blown": result.is_account_blown,
        "seed": 3,
    }


def test_log_notifier_drops_muted_events(capsys):
    notifier = LogNotifier(muted=frozenset({"ACCOUNT_BLOWN"}))
    monitor = Monitor(notifier)
    monitor.account_blown(1, 12)
    monitor.batch_complete(10, 2, 20.0)

    out = capsys.readouterr().out
    assert "ACCOUNT_BLOWN" not in out
    assert out == "[PROP-SIM] BATCH_COMPLETE: 10 runs, 2 failed (20.00%)\n"
