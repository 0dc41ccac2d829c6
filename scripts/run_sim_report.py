from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path

from prop_sim.config import load_config, serialize_config
from prop_sim.monitoring import AuditLog, LogNotifier, Monitor
from prop_sim.runtime import create_run_context
from prop_sim.simulator import BatchResult, normalize_curve, run


def _serialize_day_logs(day_logs):
    return [
        {
            "day": log.day,
            "trades": [asdict(trade) for trade in log.trades],
            "start_balance": log.start_balance,
            "end_balance": log.end_balance,
            "daily_pnl": log.daily_pnl,
            "daily_pnl_percent": log.daily_pnl_percent,
            "daily_loss_breach": log.daily_loss_breach,
            "drawdown_breach": log.drawdown_breach,
            "allowed_minimum": log.allowed_minimum,
        }
        for log in day_logs
    ]


def _single_run_report(result) -> dict:
    report = {
        "summary": {
            "final_balance": result.final_balance,
            "net_profit": result.net_profit,
            "total_return_percent": result.total_return_percent,
            "max_drawdown_percent": result.max_drawdown_percent,
            "expectancy": result.expectancy,
            "risk_reward_ratio": result.risk_reward_ratio,
            "risk_percentage": result.risk_percentage,
            "average_trade_amount": result.average_trade_amount,
            "average_trade_percent": result.average_trade_percent,
            "win_count": result.win_count,
            "loss_count": result.loss_count,
            "fixed_risk_amount": result.fixed_risk_amount,
            "break_even_trade_index": result.break_even_trade_index,
            "actual_trades_taken": result.actual_trades_taken,
            "is_account_blown": result.is_account_blown,
        },
        "equity_curve": result.equity_curve,
        "equity_curve_normalized": normalize_curve(result.equity_curve),
        "drawdown_curve": result.drawdown_curve,
    }
    stats = result.prop_firm_stats
    if stats is not None:
        report["prop_firm"] = {
            "drawdown_type": stats.drawdown_type.value,
            "fixed_drawdown_limit": stats.fixed_drawdown_limit,
            "max_daily_loss_percent": stats.max_daily_loss_percent,
            "trades_per_day_target": stats.trades_per_day_target,
            "daily_loss_breaches": stats.daily_loss_breaches,
            "max_consecutive_loss_days": stats.max_consecutive_loss_days,
            "day_count": stats.day_count,
            "average_trades_per_day": stats.average_trades_per_day,
            "breach_day": stats.breach_day.day if stats.breach_day else None,
            "day_logs": _serialize_day_logs(stats.day_logs),
        }
    return report


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", required=True)
    parser.add_argument("--output", required=True)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    config_path = Path(args.config)
    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    config = load_config(config_path)
    seed = args.seed if args.seed is not None else config.batch.seed
    context = create_run_context(config_path, config.run_id_prefix, config.parameters, seed=seed)

    monitor = Monitor(LogNotifier())
    audit = AuditLog(
        Path(config.monitoring.audit_log_path),
        run_id=context.run_id,
        config_hash=context.config_hash,
    )
    audit.log("run_start", context.describe())

    result = run(
        config.parameters,
        seed=seed,
        max_workers=config.batch.max_workers,
        max_total_trades=config.batch.max_total_trades,
        monitor=monitor,
        audit_log=audit,
    )

    if isinstance(result, BatchResult):
        body = {"batch": asdict(result)}
    else:
        body = _single_run_report(result)

    report = {
        "generated_at_utc": datetime.now(timezone.utc).isoformat(),
        "run_id": context.run_id,
        "config_path": str(config_path),
        "config": serialize_config(config),
        "seed": seed,
        **body,
    }

    output_path.write_text(json.dumps(report, indent=2, default=str), encoding="utf-8")
    audit.log("report_written", {"output": str(output_path)})
    print(f"Wrote {output_path}")


if __name__ == "__main__":
    main()
